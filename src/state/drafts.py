"""Draft forms: the create-listing form and the chat composer."""

import math
from dataclasses import dataclass, field
from typing import Optional

from src.models.listing import (
    NO_DOCUMENT,
    ListingDraft,
    listing_draft_errors,
    parse_price,
)


@dataclass
class DraftValidation:
    """Validated draft, or the field errors that prevented it."""
    draft: Optional[ListingDraft] = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.draft is not None and not self.errors


@dataclass
class ListingDraftForm:
    """Raw text of the create-listing form as typed by the agent."""
    mls_number: str = ""
    address: str = ""
    price_text: str = ""
    compensation: str = ""
    document_name: Optional[str] = None

    def update(self, **fields: Optional[str]) -> None:
        for name, value in fields.items():
            if not hasattr(self, name):
                raise AttributeError(f"Unknown form field: {name}")
            setattr(self, name, value)

    def validate(self) -> DraftValidation:
        """Parse and check every field before anything is submitted."""
        parsed = parse_price(self.price_text)
        draft = ListingDraft(
            mls_number=self.mls_number.strip(),
            address=self.address.strip(),
            price=parsed.value if parsed.ok else math.nan,
            compensation=self.compensation.strip(),
            document=self.document_name or NO_DOCUMENT,
        )
        errors = listing_draft_errors(draft)
        if not parsed.ok:
            errors["price"] = parsed.error
        if errors:
            return DraftValidation(errors=errors)
        return DraftValidation(draft=draft)

    def reset(self) -> None:
        self.mls_number = ""
        self.address = ""
        self.price_text = ""
        self.compensation = ""
        self.document_name = None


@dataclass
class ComposerDraft:
    """Text in the chat composer. Kept until a send succeeds."""
    text: str = ""

    @property
    def sendable(self) -> bool:
        return bool(self.text.strip())

    def clear(self) -> None:
        self.text = ""
