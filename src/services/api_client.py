"""
Shared HTTP client for the listing desk REST API.

One httpx.AsyncClient configured with the API base URL and a fixed per-call
timeout. There is no retry, caching or batching: each call is a single
request whose failure is raised as TransportError.
"""

import asyncio
import json
from typing import Any, Optional

import httpx

from src.utils.config import ApiConfig
from src.utils.errors import TransportError
from src.utils.logging import get_structured_logger, get_correlation_id, log_timing
from src.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)


class ApiClient:
    """Thin async JSON client over httpx."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or ApiConfig.API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else ApiConfig.API_TIMEOUT_SECONDS
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    def _headers(self, has_body: bool) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if has_body:
            headers["Content-Type"] = "application/json"
        correlation_id = get_correlation_id()
        if correlation_id:
            headers[LoggingConfig.LOG_CORRELATION_ID_HEADER] = correlation_id
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        payload: Optional[Any] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to the base URL, e.g. "/listings"
            params: Query parameters, forwarded verbatim (empty strings included)
            payload: JSON-serializable request body

        Raises:
            TransportError: timeout, connection failure, non-2xx status or
                a body that is not JSON
        """
        url = f"{self.base_url}{path}"
        # json.dumps keeps NaN as a bare token; httpx's own encoder refuses it
        content = json.dumps(payload).encode("utf-8") if payload is not None else None

        with log_timing("api_request", logger=logger, method=method, path=path):
            try:
                # httpx times each phase separately; the budget covers the whole call
                response = await asyncio.wait_for(
                    self.client.request(
                        method,
                        path,
                        params=params,
                        content=content,
                        headers=self._headers(content is not None),
                    ),
                    timeout=self.timeout,
                )
                response.raise_for_status()

            except (httpx.TimeoutException, asyncio.TimeoutError) as e:
                logger.error("API request timed out", method=method, url=url, timeout_seconds=self.timeout)
                raise TransportError(
                    f"{method} {url} timed out after {self.timeout}s",
                    method=method,
                    url=url,
                    timed_out=True,
                ) from e

            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                logger.error("API request failed", method=method, url=url, status_code=status_code)
                raise TransportError(
                    f"{method} {url} failed with HTTP {status_code}",
                    method=method,
                    url=url,
                    status_code=status_code,
                ) from e

            except httpx.HTTPError as e:
                logger.error("API request could not be sent", method=method, url=url, error=str(e))
                raise TransportError(
                    f"{method} {url} failed: {e}",
                    method=method,
                    url=url,
                ) from e

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"{method} {url} returned a non-JSON body",
                method=method,
                url=url,
                status_code=response.status_code,
            ) from e

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
