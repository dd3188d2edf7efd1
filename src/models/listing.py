"""Listing models."""

import math
import re
from dataclasses import dataclass
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Document reference sent when the agent did not pick a file
NO_DOCUMENT = "No document"

_FLOAT_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


def parse_float_prefix(text: Optional[str]) -> float:
    """
    Parse the leading number of user-entered text.

    Same rules as a browser's parseFloat: leading whitespace is skipped,
    trailing garbage is ignored ("450000abc" -> 450000.0) and text without a
    numeric prefix yields NaN.
    """
    match = _FLOAT_PREFIX.match((text or "").lstrip())
    if not match:
        return math.nan
    token = match.group(0)
    if token.endswith("Infinity"):
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


@dataclass(frozen=True)
class PriceParse:
    """Outcome of parsing a price field: a value or an error message."""
    value: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_price(text: Optional[str]) -> PriceParse:
    """Strictly parse a price field ("$450,000" is accepted, "450k" is not)."""
    cleaned = (text or "").strip()
    if cleaned.startswith("$"):
        cleaned = cleaned[1:]
    cleaned = cleaned.replace(",", "").strip()

    if not cleaned:
        return PriceParse(error="Price is required")
    try:
        value = float(cleaned)
    except ValueError:
        return PriceParse(error=f"Price must be a number, got {text!r}")
    if not math.isfinite(value):
        return PriceParse(error="Price must be a finite number")
    if value < 0:
        return PriceParse(error="Price cannot be negative")
    return PriceParse(value=value)


class ListingDraft(CamelModel):
    """Listing as submitted by an agent, before the server assigns metadata."""
    mls_number: str = Field(..., description="MLS registry number")
    address: str = Field(..., description="Property address")
    price: float = Field(..., description="Asking price; NaN when the entered text was not numeric")
    compensation: str = Field("", description="Buyer agent compensation, free text")
    document: str = Field(NO_DOCUMENT, description="Uploaded file name or placeholder")
    agent_name: Optional[str] = Field(None, description="Listing agent, filled by the server when absent")
    company_name: Optional[str] = Field(None, description="Brokerage, filled by the server when absent")

    @classmethod
    def from_form(
        cls,
        mls_number: str,
        address: str,
        price_text: str,
        compensation: str = "",
        document_name: Optional[str] = None,
    ) -> "ListingDraft":
        """Build a draft from raw form fields without validating them."""
        return cls(
            mls_number=mls_number,
            address=address,
            price=parse_float_prefix(price_text),
            compensation=compensation,
            document=document_name or NO_DOCUMENT,
        )

    def to_payload(self) -> dict:
        """Wire payload; NaN prices are kept as-is."""
        return self.model_dump(by_alias=True, exclude_none=True)


def listing_draft_errors(draft: ListingDraft) -> dict[str, str]:
    """Field errors for a draft, keyed by wire field name. Empty when valid."""
    errors: dict[str, str] = {}
    if not draft.mls_number.strip():
        errors["mlsNumber"] = "MLS number is required"
    if not draft.address.strip():
        errors["address"] = "Address is required"
    if not math.isfinite(draft.price):
        errors["price"] = "Price must be a finite number"
    elif draft.price < 0:
        errors["price"] = "Price cannot be negative"
    return errors


class Listing(CamelModel):
    """Real estate listing as stored and served by the backend."""
    id: str = Field(..., description="Server-assigned listing ID")
    mls_number: str = Field(..., description="MLS registry number")
    address: str = Field(..., description="Property address")
    price: float = Field(..., description="Asking price")
    compensation: str = Field("", description="Buyer agent compensation, free text")
    document: str = Field(NO_DOCUMENT, description="Uploaded file name or placeholder")
    agent_name: Optional[str] = Field(None, description="Listing agent name")
    company_name: Optional[str] = Field(None, description="Brokerage name")
    created_at: datetime
    updated_at: datetime
