"""Snapshot records read from the wardrobe document store.

Records are frozen so that a snapshot handed to the aggregator cannot be
changed underneath another caller. The ``*_from_raw`` factories accept both
snake_case keys and the camelCase keys the mobile client and the document
store use (``userId``, ``garmentIds``, ``wearCount``, ``_id`` ...).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from models.errors import InvalidRecord
from models.taxonomy import (
    SEASON_ALIASES,
    SEASON_TAGS,
    normalise_tags,
    normalize_category,
    normalize_color_name,
)


def _pick(raw: Dict[str, Any], *keys: str) -> Any:
    """Return the first non-None value among ``keys``."""

    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _record_id(raw: Dict[str, Any]) -> str:
    value = _pick(raw, "id", "_id")
    if value is None or not str(value).strip():
        raise InvalidRecord(None, "id", "is required")
    return str(value)


def _require(raw: Dict[str, Any], record_id: str, name: str, *keys: str) -> Any:
    value = _pick(raw, *keys)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidRecord(record_id, name, "is required")
    return value


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _text_values(values: Any, record_id: str, name: str) -> List[str]:
    """Coerce ``values`` into a list and require every entry to be a string."""

    items = _ensure_list(values)
    for item in items:
        if not isinstance(item, str):
            raise InvalidRecord(record_id, name, f"must be a string, got {item!r}")
    return items


def to_calendar_day(value: Any, record_id: Optional[str] = None, field_name: str = "date") -> date:
    """Collapse a date, datetime or ISO-8601 string onto its calendar day.

    Aware datetimes are converted to UTC first, which is how the store
    serialises timestamps (``2025-09-13T00:00:00.000Z``). Naive values keep
    their own calendar day.
    """

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidRecord(record_id, field_name, "is empty")
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidRecord(record_id, field_name, f"is not an ISO-8601 date: {value!r}") from exc
        return to_calendar_day(parsed, record_id, field_name)
    raise InvalidRecord(record_id, field_name, f"has unsupported type {type(value).__name__}")


def _to_number(value: Any, record_id: str, name: str) -> float:
    if isinstance(value, bool):
        raise InvalidRecord(record_id, name, "must be a number")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRecord(record_id, name, f"must be a number, got {value!r}") from exc


@dataclass(frozen=True)
class User:
    """A closet owner and their style preferences."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    styles: Tuple[str, ...] = ()
    favorite_colors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Garment:
    """A single wardrobe item. ``wear_count`` is denormalised from Usage records."""

    id: str
    user_id: str
    category: str
    color: str
    name: Optional[str] = None
    season: Tuple[str, ...] = ()
    image_url: Optional[str] = None
    cost: Optional[float] = None
    wear_count: int = 0


@dataclass(frozen=True)
class Outfit:
    """A dated composition of garments."""

    id: str
    user_id: str
    date: date
    garment_ids: Tuple[str, ...] = field(default_factory=tuple)
    preview_image_ref: Optional[str] = None
    occasion: Optional[str] = None


@dataclass(frozen=True)
class Usage:
    """One garment worn on one calendar day, optionally as part of an outfit."""

    id: str
    user_id: str
    garment_id: str
    worn_date: date
    outfit_id: Optional[str] = None


def user_from_raw(raw: Dict[str, Any]) -> User:
    record_id = _record_id(raw)
    preferences = raw.get("preferences") or {}
    if not isinstance(preferences, dict):
        raise InvalidRecord(record_id, "preferences", "must be a mapping")
    styles = _text_values(_pick(preferences, "styles", "style"), record_id, "styles")
    colours = _text_values(_pick(preferences, "favorite_colors", "favoriteColors"), record_id, "favorite_colors")
    return User(
        id=record_id,
        name=raw.get("name"),
        email=raw.get("email"),
        styles=tuple(s.strip().lower() for s in styles if s.strip()),
        favorite_colors=tuple(normalize_color_name(c) for c in colours if c.strip()),
    )


def garment_from_raw(raw: Dict[str, Any]) -> Garment:
    """Factory to build a :class:`Garment` from a loose document."""

    record_id = _record_id(raw)
    user_id = _require(raw, record_id, "user_id", "user_id", "userId", "user")
    category = _require(raw, record_id, "category", "category")

    cost = raw.get("cost")
    wear_count = _pick(raw, "wear_count", "wearCount", "timesWorn")
    if wear_count is None:
        wear_count = 0
    if isinstance(wear_count, bool) or not isinstance(wear_count, int) or wear_count < 0:
        raise InvalidRecord(record_id, "wear_count", f"must be a non-negative integer, got {wear_count!r}")
    colour = _pick(raw, "color", "colour")
    if colour is not None and not isinstance(colour, str):
        raise InvalidRecord(record_id, "color", f"must be a string, got {colour!r}")
    season = _text_values(raw.get("season"), record_id, "season")

    return Garment(
        id=record_id,
        user_id=str(user_id),
        category=normalize_category(str(category)),
        color=normalize_color_name(colour),
        name=raw.get("name"),
        season=tuple(normalise_tags(season, SEASON_TAGS, SEASON_ALIASES)),
        image_url=_pick(raw, "image_url", "imageUrl"),
        cost=_to_number(cost, record_id, "cost") if cost is not None else None,
        wear_count=wear_count,
    )


def outfit_from_raw(raw: Dict[str, Any]) -> Outfit:
    """Factory to build an :class:`Outfit`; the date falls back to ``createdAt``."""

    record_id = _record_id(raw)
    user_id = _require(raw, record_id, "user_id", "user_id", "userId", "user")
    raw_date = _require(raw, record_id, "date", "date", "created_at", "createdAt")
    garment_ids = _ensure_list(_pick(raw, "garment_ids", "garmentIds", "garments"))
    return Outfit(
        id=record_id,
        user_id=str(user_id),
        date=to_calendar_day(raw_date, record_id, "date"),
        garment_ids=tuple(str(g) for g in garment_ids),
        preview_image_ref=_pick(raw, "preview_image_ref", "previewImageRef", "previewImage"),
        occasion=raw.get("occasion"),
    )


def usage_from_raw(raw: Dict[str, Any]) -> Usage:
    record_id = _record_id(raw)
    user_id = _require(raw, record_id, "user_id", "user_id", "userId", "user")
    garment_id = _require(raw, record_id, "garment_id", "garment_id", "garmentId", "garment")
    worn_date = _require(raw, record_id, "worn_date", "worn_date", "wornDate")
    outfit_id = _pick(raw, "outfit_id", "outfitId", "outfit")
    return Usage(
        id=record_id,
        user_id=str(user_id),
        garment_id=str(garment_id),
        worn_date=to_calendar_day(worn_date, record_id, "worn_date"),
        outfit_id=str(outfit_id) if outfit_id is not None else None,
    )


def garments_from_raw(documents: Iterable[Dict[str, Any]]) -> List[Garment]:
    return [garment_from_raw(doc) for doc in documents]


def outfits_from_raw(documents: Iterable[Dict[str, Any]]) -> List[Outfit]:
    return [outfit_from_raw(doc) for doc in documents]


def usages_from_raw(documents: Iterable[Dict[str, Any]]) -> List[Usage]:
    return [usage_from_raw(doc) for doc in documents]


__all__ = [
    "Garment",
    "Outfit",
    "Usage",
    "User",
    "garment_from_raw",
    "garments_from_raw",
    "outfit_from_raw",
    "outfits_from_raw",
    "to_calendar_day",
    "usage_from_raw",
    "usages_from_raw",
    "user_from_raw",
]
