"""Derived view models handed to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from models.records import Outfit


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the calendar: a day and the outfit logged for it, if any."""

    day: date
    key: str
    outfit: Optional[Outfit] = None


# Seven-wide grid of days, blanks padding both ends.
MonthGrid = List[Optional[CalendarDay]]


@dataclass(frozen=True)
class MostWornGroup:
    signature: str
    count: int
    outfit: Outfit


@dataclass(frozen=True)
class CategoryStat:
    name: str
    count: int
    percent: int


@dataclass(frozen=True)
class ColourStat:
    colour: str
    label: str
    hex: Optional[str]
    count: int
    percent: int


@dataclass(frozen=True)
class OverviewStats:
    """Headline numbers for the analytics screen."""

    total_items: int
    wardrobe_usage_percent: int
    outfits_worn: int
    total_outfits: int
    outfit_percent: int


@dataclass(frozen=True)
class WornItem:
    id: str
    name: Optional[str]
    image_url: Optional[str]
    wear_count: int
    category: str


@dataclass(frozen=True)
class WearCountMismatch:
    garment_id: str
    stored: int
    reconstructed: int


__all__ = [
    "CalendarDay",
    "CategoryStat",
    "ColourStat",
    "MonthGrid",
    "MostWornGroup",
    "OverviewStats",
    "WearCountMismatch",
    "WornItem",
]
