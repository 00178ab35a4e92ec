"""Calendar views over a user's logged outfits.

Months are one-based (1 = January) throughout, matching :mod:`datetime` and
:mod:`calendar`. Grids and week strips start on Sunday.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional

from closet_app.logging_config import get_logger, log_event
from models.records import Outfit, to_calendar_day
from models.views import CalendarDay, MonthGrid

LOGGER = get_logger(__name__)

DAYS_IN_WEEK = 7


def date_key(value: Any) -> str:
    """Return the ``YYYY-MM-DD`` key for the calendar day of ``value``.

    Two values on the same calendar day always share a key, whatever their
    time of day. Unparseable strings raise :class:`models.errors.InvalidRecord`.
    """

    return to_calendar_day(value).isoformat()


def build_outfit_index(outfits: Iterable[Outfit]) -> Dict[str, Outfit]:
    """Map each day key to the outfit logged on it.

    Only one outfit per day is expected. When a day appears twice the last
    outfit in input order wins; the collision is logged, never merged.
    """

    index: Dict[str, Outfit] = {}
    for outfit in outfits:
        key = date_key(outfit.date)
        previous = index.get(key)
        if previous is not None and previous.id != outfit.id:
            log_event(
                LOGGER,
                logging.WARNING,
                "duplicate_outfit_day",
                day=key,
                replaced_outfit_id=previous.id,
                outfit_id=outfit.id,
            )
        index[key] = outfit
    return index


def _check_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    if not date.min.year <= year <= date.max.year:
        raise ValueError(f"year out of range: {year}")


def month_grid(year: int, month: int) -> List[Optional[date]]:
    """Lay out a month as a Sunday-first grid padded with ``None`` blanks.

    The result length is always a multiple of seven.
    """

    _check_month(year, month)
    monday_based, days_in_month = calendar.monthrange(year, month)
    leading = (monday_based + 1) % DAYS_IN_WEEK

    grid: List[Optional[date]] = [None] * leading
    grid.extend(date(year, month, day) for day in range(1, days_in_month + 1))
    while len(grid) % DAYS_IN_WEEK:
        grid.append(None)
    return grid


def calendar_month(outfit_index: Mapping[str, Outfit], year: int, month: int) -> MonthGrid:
    """Resolve every day of :func:`month_grid` against the outfit index."""

    cells: MonthGrid = []
    for day in month_grid(year, month):
        if day is None:
            cells.append(None)
            continue
        key = day.isoformat()
        cells.append(CalendarDay(day=day, key=key, outfit=outfit_index.get(key)))
    return cells


def week_of(day: Any) -> List[date]:
    """Return the Sunday-to-Saturday week containing ``day``."""

    day = to_calendar_day(day)
    days_since_sunday = (day.weekday() + 1) % DAYS_IN_WEEK
    sunday = day - timedelta(days=days_since_sunday)
    return [sunday + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]


def current_streak(outfit_index: Mapping[str, Outfit], today: Any) -> int:
    """Count consecutive logged days ending at (and including) ``today``.

    A day without an outfit ends the chain, so a missing ``today`` gives 0.
    The walk can never take more steps than there are indexed days.
    """

    day = to_calendar_day(today)
    streak = 0
    for _ in range(len(outfit_index)):
        if day.isoformat() not in outfit_index:
            break
        streak += 1
        day -= timedelta(days=1)
    return streak


def longest_streak(outfit_index: Mapping[str, Outfit]) -> int:
    """Longest run of consecutive logged days anywhere in the index."""

    days = sorted({to_calendar_day(key) for key in outfit_index})
    best = 0
    run = 0
    previous: Optional[date] = None
    for day in days:
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = day
    return best


__all__ = [
    "build_outfit_index",
    "calendar_month",
    "current_streak",
    "date_key",
    "longest_streak",
    "month_grid",
    "week_of",
]
