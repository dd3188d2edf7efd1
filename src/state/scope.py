"""View scopes: drop responses that resolve after their view was dismissed."""

from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

T = TypeVar("T")


@dataclass
class Settled(Generic[T]):
    """Result of an awaited call. dropped means the view went away meanwhile."""
    value: Optional[T] = None
    dropped: bool = False


class ViewScope:
    """
    Lifetime of one view (listings page, create dialog, open chat).

    In-flight calls are never aborted. A call settled through the scope
    remembers the generation it started in; if the view is dismissed or
    reopened before the call resolves, its result (or error) is dropped
    instead of being applied to state the view no longer shows.
    """

    def __init__(self, name: str, is_open: bool = True):
        self.name = name
        self._open = is_open
        self._generation = 0

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def generation(self) -> int:
        return self._generation

    def open(self) -> None:
        """Show the view; anything still in flight from before is now stale."""
        self._generation += 1
        self._open = True

    def dismiss(self) -> None:
        self._generation += 1
        self._open = False

    def is_current(self, generation: int) -> bool:
        return self._open and generation == self._generation

    async def settle(self, call: Awaitable[T]) -> Settled[T]:
        """
        Await a call on behalf of this view.

        Errors from a still-current call propagate unchanged; errors from a
        stale call are logged and dropped like stale results.
        """
        generation = self._generation
        try:
            value = await call
        except Exception as e:
            if self.is_current(generation):
                raise
            logger.debug("Dropped error for dismissed view", view=self.name, error=str(e))
            return Settled(dropped=True)

        if not self.is_current(generation):
            logger.info("Dropped response for dismissed view", view=self.name)
            return Settled(dropped=True)
        return Settled(value=value)
