"""Shared building blocks for domain models

Numeric fields on an invoice are free-form user input. They are coerced to
Decimal at the model boundary so that totals never see NaN, Infinity or text.
"""

import math
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel as PydanticBaseModel, BeforeValidator

ZERO = Decimal("0")


def generate_uuid() -> str:
    """Generate a collision-resistant identifier for persisted records"""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def coerce_amount(value: Any) -> Decimal:
    """
    Coerce arbitrary input to a finite Decimal

    Missing, boolean, non-numeric and non-finite values become 0.
    Floats go through repr() so 0.1 stays 0.1 instead of its binary expansion.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value)) if math.isfinite(value) else ZERO
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except ArithmeticError:
            return ZERO
        return parsed if parsed.is_finite() else ZERO
    return ZERO


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def coerce_optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return coerce_text(value)


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO timestamp; naive values are taken as UTC, garbage becomes None"""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def coerce_record_id(value: Any) -> str:
    if value is None or isinstance(value, bool) or value == "":
        raise ValueError("record id is required")
    return str(value)


Amount = Annotated[Decimal, BeforeValidator(coerce_amount)]
Text = Annotated[str, BeforeValidator(coerce_text)]
OptionalText = Annotated[Optional[str], BeforeValidator(coerce_optional_text)]
Timestamp = Annotated[Optional[datetime], BeforeValidator(coerce_timestamp)]
RecordId = Annotated[str, BeforeValidator(coerce_record_id)]


class BaseModel(PydanticBaseModel):
    """
    Base for all domain models; accepts both camelCase aliases and field names

    Defaults go through the same validators as input, so an omitted amount
    is a Decimal like any other.
    """

    class Config:
        populate_by_name = True
        validate_default = True

    def to_storage(self) -> dict:
        """JSON-safe dict keyed by the camelCase aliases used in storage and HTTP"""
        return self.model_dump(mode="json", by_alias=True)
