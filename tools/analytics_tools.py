"""Analytics facade that loads snapshots from the store and runs the aggregator."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from closet_app.config import ClosetConfig
from logic import analytics
from logic.calendar_views import (
    build_outfit_index,
    calendar_month,
    current_streak,
    longest_streak,
    week_of,
)
from logic.validation import MonthQuery, WornListQuery
from models.records import outfit_from_raw, to_calendar_day, usage_from_raw
from tools.observability import instrument_operation
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore


def _as_dict(value: Any) -> Optional[Dict[str, Any]]:
    return asdict(value) if value is not None else None


class AnalyticsTools:
    """Thin wrapper exposing calendar and analytics views per user.

    Each call fetches fresh snapshots, so no state is kept between calls.
    """

    def __init__(self, store: Optional[WardrobeStore] = None, config: Optional[ClosetConfig] = None) -> None:
        self.config = config or ClosetConfig()
        self.store = store or SQLiteWardrobeStore(self.config.database_path)

    def today(self) -> date:
        return datetime.now(ZoneInfo(self.config.timezone)).date()

    @instrument_operation("user_profile")
    def user_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        user = self.store.get_user(user_id)
        if user is None:
            return None
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "preferences": {"styles": list(user.styles), "favorite_colors": list(user.favorite_colors)},
        }

    @instrument_operation("calendar_month", input_model=MonthQuery)
    def calendar_month(self, user_id: str, year: int, month: int) -> Dict[str, Any]:
        outfits = self.store.list_outfits(user_id)
        index = build_outfit_index(outfits)
        return {
            "year": year,
            "month": month,
            "cells": [_as_dict(cell) for cell in calendar_month(index, year, month)],
            "most_worn": _as_dict(analytics.most_worn_this_month(outfits, year, month)),
        }

    @instrument_operation("week")
    def week(self, user_id: str, day: Any = None) -> List[Dict[str, Any]]:
        index = build_outfit_index(self.store.list_outfits(user_id))
        target = to_calendar_day(day) if day is not None else self.today()
        return [
            {"day": d, "key": d.isoformat(), "outfit": _as_dict(index.get(d.isoformat()))}
            for d in week_of(target)
        ]

    @instrument_operation("streak")
    def streak(self, user_id: str, today: Any = None) -> Dict[str, Any]:
        index = build_outfit_index(self.store.list_outfits(user_id))
        reference = to_calendar_day(today) if today is not None else self.today()
        return {
            "today": reference,
            "current": current_streak(index, reference),
            "longest": longest_streak(index),
        }

    @instrument_operation("most_worn_this_month", input_model=MonthQuery)
    def most_worn_this_month(self, user_id: str, year: int, month: int) -> Optional[Dict[str, Any]]:
        return _as_dict(analytics.most_worn_this_month(self.store.list_outfits(user_id), year, month))

    @instrument_operation("overview")
    def overview(self, user_id: str) -> Dict[str, Any]:
        garments = self.store.list_garments(user_id)
        stats = analytics.overview(garments, self.store.list_outfits(user_id), self.store.list_usages(user_id))
        return {
            **asdict(stats),
            "favourite_colours": analytics.top_colours(analytics.colour_breakdown(garments)),
        }

    @instrument_operation("categories")
    def categories(self, user_id: str) -> List[Dict[str, Any]]:
        return [asdict(stat) for stat in analytics.category_breakdown(self.store.list_garments(user_id))]

    @instrument_operation("colours")
    def colours(self, user_id: str) -> List[Dict[str, Any]]:
        return [asdict(stat) for stat in analytics.colour_breakdown(self.store.list_garments(user_id))]

    @instrument_operation("most_worn", input_model=WornListQuery)
    def most_worn(self, user_id: str, limit: int) -> List[Dict[str, Any]]:
        return [asdict(item) for item in analytics.most_worn(self.store.list_garments(user_id), limit)]

    @instrument_operation("least_worn", input_model=WornListQuery)
    def least_worn(self, user_id: str, limit: int) -> List[Dict[str, Any]]:
        return [asdict(item) for item in analytics.least_worn(self.store.list_garments(user_id), limit)]

    @instrument_operation("never_worn", input_model=WornListQuery)
    def never_worn(self, user_id: str, limit: int) -> List[Dict[str, Any]]:
        return [asdict(item) for item in analytics.never_worn(self.store.list_garments(user_id), limit)]

    @instrument_operation("wear_count_audit")
    def wear_count_audit(self, user_id: str) -> List[Dict[str, Any]]:
        mismatches = analytics.wear_count_mismatches(
            self.store.list_garments(user_id), self.store.list_usages(user_id)
        )
        return [asdict(m) for m in mismatches]

    @instrument_operation("outfits")
    def outfits(self, user_id: str) -> List[Dict[str, Any]]:
        """Logged outfits in the order they were saved."""

        return [asdict(outfit) for outfit in self.store.list_outfits(user_id)]

    @instrument_operation("log_outfit")
    def log_outfit(self, user_id: str, outfit_data: Dict[str, Any]) -> Dict[str, Any]:
        outfit = outfit_from_raw({**outfit_data, "user_id": user_id})
        return asdict(self.store.create_outfit(outfit))

    @instrument_operation("delete_outfit")
    def delete_outfit(self, user_id: str, outfit_id: str) -> bool:
        return self.store.delete_outfit(user_id, outfit_id)

    @instrument_operation("record_usage")
    def record_usage(self, user_id: str, usage_data: Dict[str, Any]) -> Dict[str, Any]:
        usage = usage_from_raw({**usage_data, "user_id": user_id})
        return asdict(self.store.record_usage(usage))


__all__ = ["AnalyticsTools"]
