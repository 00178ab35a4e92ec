"""Wardrobe analytics rollups.

Everything here is a pure function over record snapshots: inputs are only
read, results are freshly built, and empty inputs give empty or zero results.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from models.records import Garment, Outfit, Usage
from models.taxonomy import COLOUR_HEX, colour_label
from models.views import (
    CategoryStat,
    ColourStat,
    MostWornGroup,
    OverviewStats,
    WearCountMismatch,
    WornItem,
)

DEFAULT_LIMIT = 6


def percent_of(count: int, total: int) -> int:
    """Whole percentage with halves rounded up; 0 when ``total`` is 0."""

    if total <= 0:
        return 0
    return int(math.floor(100 * count / total + 0.5))


def outfit_signature(outfit: Outfit) -> str:
    """Order-independent key for the set of garments in an outfit."""

    return ",".join(sorted(outfit.garment_ids))


def most_worn_this_month(outfits: Iterable[Outfit], year: int, month: int) -> Optional[MostWornGroup]:
    """Find the garment combination logged most often in a month.

    Outfits are grouped by :func:`outfit_signature`; the first outfit of each
    group represents it. On a tie the group seen first in the month wins.
    """

    counts: Counter = Counter()
    representatives: Dict[str, Outfit] = {}
    for outfit in outfits:
        if outfit.date.year != year or outfit.date.month != month:
            continue
        signature = outfit_signature(outfit)
        representatives.setdefault(signature, outfit)
        counts[signature] += 1

    if not counts:
        return None

    # most_common keeps first-encountered order among equal counts
    signature, count = counts.most_common(1)[0]
    return MostWornGroup(signature=signature, count=count, outfit=representatives[signature])


def _breakdown(garments: Sequence[Garment], key: Callable[[Garment], str]) -> List[Tuple[str, int, int]]:
    total = len(garments)
    if total == 0:
        return []
    counts = Counter(key(garment) for garment in garments)
    ordered = sorted(counts.items(), key=lambda pair: (-pair[1], pair[0]))
    return [(name, count, percent_of(count, total)) for name, count in ordered]


def category_breakdown(garments: Sequence[Garment]) -> List[CategoryStat]:
    """Count garments per category, largest first, ties by name."""

    return [
        CategoryStat(name=name, count=count, percent=percent)
        for name, count, percent in _breakdown(garments, lambda g: g.category)
    ]


def colour_breakdown(garments: Sequence[Garment]) -> List[ColourStat]:
    """Count garments per colour, largest first, ties by colour name."""

    return [
        ColourStat(
            colour=colour,
            label=colour_label(colour),
            hex=COLOUR_HEX.get(colour),
            count=count,
            percent=percent,
        )
        for colour, count, percent in _breakdown(garments, lambda g: g.color)
    ]


def top_colours(breakdown: Sequence[ColourStat], n: int = 2) -> List[str]:
    """Labels of the ``n`` most common colours, for the favourite-colours line."""

    return [stat.label for stat in breakdown[: max(n, 0)]]


def overview(
    garments: Sequence[Garment],
    outfits: Sequence[Outfit],
    usages: Iterable[Usage],
) -> OverviewStats:
    total_items = len(garments)
    worn_items = sum(1 for garment in garments if garment.wear_count > 0)
    outfit_ids = {outfit.id for outfit in outfits}
    worn_outfits = {
        usage.outfit_id for usage in usages if usage.outfit_id is not None and usage.outfit_id in outfit_ids
    }
    return OverviewStats(
        total_items=total_items,
        wardrobe_usage_percent=percent_of(worn_items, total_items),
        outfits_worn=len(worn_outfits),
        total_outfits=len(outfit_ids),
        outfit_percent=percent_of(len(worn_outfits), len(outfit_ids)),
    )


def _check_limit(limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")


def _worn_item(garment: Garment) -> WornItem:
    return WornItem(
        id=garment.id,
        name=garment.name,
        image_url=garment.image_url,
        wear_count=garment.wear_count,
        category=garment.category,
    )


def most_worn(garments: Iterable[Garment], limit: int = DEFAULT_LIMIT) -> List[WornItem]:
    _check_limit(limit)
    worn = [g for g in garments if g.wear_count > 0]
    worn.sort(key=lambda g: (-g.wear_count, g.id))
    return [_worn_item(g) for g in worn[:limit]]


def least_worn(garments: Iterable[Garment], limit: int = DEFAULT_LIMIT) -> List[WornItem]:
    """Garments worn at least once, least worn first."""

    _check_limit(limit)
    worn = [g for g in garments if g.wear_count > 0]
    worn.sort(key=lambda g: (g.wear_count, g.id))
    return [_worn_item(g) for g in worn[:limit]]


def never_worn(garments: Iterable[Garment], limit: int = DEFAULT_LIMIT) -> List[WornItem]:
    _check_limit(limit)
    unworn = sorted((g for g in garments if g.wear_count == 0), key=lambda g: g.id)
    return [_worn_item(g) for g in unworn[:limit]]


def reconstruct_wear_counts(usages: Iterable[Usage]) -> Dict[str, int]:
    """Rebuild per-garment wear counts from Usage records."""

    return dict(Counter(usage.garment_id for usage in usages))


def wear_count_mismatches(garments: Iterable[Garment], usages: Iterable[Usage]) -> List[WearCountMismatch]:
    """Garments whose stored wear count disagrees with their Usage records.

    Usages pointing at garments outside the snapshot are ignored.
    """

    reconstructed = reconstruct_wear_counts(usages)
    mismatches = []
    for garment in sorted(garments, key=lambda g: g.id):
        expected = reconstructed.get(garment.id, 0)
        if garment.wear_count != expected:
            mismatches.append(
                WearCountMismatch(garment_id=garment.id, stored=garment.wear_count, reconstructed=expected)
            )
    return mismatches


__all__ = [
    "DEFAULT_LIMIT",
    "category_breakdown",
    "colour_breakdown",
    "least_worn",
    "most_worn",
    "most_worn_this_month",
    "never_worn",
    "outfit_signature",
    "overview",
    "percent_of",
    "reconstruct_wear_counts",
    "top_colours",
    "wear_count_mismatches",
]
