"""Pydantic schemas for validating analytics requests and write payloads."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from logic.analytics import DEFAULT_LIMIT


class MonthQuery(BaseModel):
    """A calendar month, one-based."""

    user_id: str = Field(min_length=1)
    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)


class WornListQuery(BaseModel):
    """Input contract for most/least/never worn lists."""

    user_id: str = Field(min_length=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=100)


class OutfitCreate(BaseModel):
    """Payload for logging an outfit on a calendar day."""

    id: str = Field(min_length=1)
    date: dt.date
    garment_ids: List[str] = Field(default_factory=list)
    preview_image_ref: Optional[str] = None
    occasion: Optional[str] = None


class UsageCreate(BaseModel):
    """Payload for recording that a garment was worn."""

    id: str = Field(min_length=1)
    garment_id: str = Field(min_length=1)
    outfit_id: Optional[str] = None
    worn_date: dt.date


class ValidationResult(BaseModel):
    """Wrapper returned when a request payload fails validation."""

    status: Literal["invalid"] = "invalid"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent payload."""

    return ValidationResult(
        message=message, details=exc.errors(include_url=False, include_context=False)
    ).model_dump()


__all__ = [
    "MonthQuery",
    "OutfitCreate",
    "UsageCreate",
    "ValidationResult",
    "WornListQuery",
    "validation_failure",
]
