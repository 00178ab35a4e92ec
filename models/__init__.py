"""Model package exports."""

from models.errors import InvalidRecord
from models.records import Garment, Outfit, Usage, User
from models.views import (
    CalendarDay,
    CategoryStat,
    ColourStat,
    MostWornGroup,
    OverviewStats,
    WearCountMismatch,
    WornItem,
)

__all__ = [
    "CalendarDay",
    "CategoryStat",
    "ColourStat",
    "Garment",
    "InvalidRecord",
    "MostWornGroup",
    "Outfit",
    "OverviewStats",
    "Usage",
    "User",
    "WearCountMismatch",
    "WornItem",
]
