"""Most-worn grouping, category/colour breakdowns and wear counts."""

from __future__ import annotations

from datetime import date
from typing import List

import pytest

from logic import analytics
from models.records import Garment, Outfit, Usage, outfits_from_raw


def _garment(garment_id: str, category: str = "tops", color: str = "black", wear_count: int = 0) -> Garment:
    return Garment(id=garment_id, user_id="user-1", category=category, color=color, wear_count=wear_count)


def _usage(usage_id: str, garment_id: str, outfit_id: str | None = None) -> Usage:
    return Usage(
        id=usage_id,
        user_id="user-1",
        garment_id=garment_id,
        worn_date=date(2025, 3, 1),
        outfit_id=outfit_id,
    )


@pytest.fixture()
def march_outfits() -> List[Outfit]:
    return outfits_from_raw(
        [
            {"id": "o1", "userId": "user-1", "date": "2025-03-01", "garmentIds": ["a", "b"]},
            {"id": "o2", "userId": "user-1", "date": "2025-03-05", "garmentIds": ["b", "a"]},
            {"id": "o3", "userId": "user-1", "date": "2025-03-10", "garmentIds": ["c"]},
        ]
    )


def test_most_worn_this_month_groups_by_garment_set(march_outfits: List[Outfit]) -> None:
    result = analytics.most_worn_this_month(march_outfits, 2025, 3)

    assert result is not None
    assert result.signature == "a,b"
    assert result.count == 2
    assert result.outfit.id == "o1"


def test_most_worn_this_month_ignores_other_months(march_outfits: List[Outfit]) -> None:
    april = outfits_from_raw(
        [{"id": f"apr-{i}", "userId": "user-1", "date": f"2025-04-0{i}", "garmentIds": ["c"]} for i in range(1, 6)]
    )
    result = analytics.most_worn_this_month(march_outfits + april, 2025, 3)
    assert result is not None and result.signature == "a,b"

    assert analytics.most_worn_this_month(march_outfits, 2024, 3) is None
    assert analytics.most_worn_this_month([], 2025, 3) is None


def test_most_worn_this_month_tie_goes_to_first_seen() -> None:
    outfits = outfits_from_raw(
        [
            {"id": "x1", "userId": "u", "date": "2025-05-02", "garmentIds": ["z"]},
            {"id": "y1", "userId": "u", "date": "2025-05-03", "garmentIds": ["y"]},
            {"id": "y2", "userId": "u", "date": "2025-05-04", "garmentIds": ["y"]},
            {"id": "x2", "userId": "u", "date": "2025-05-05", "garmentIds": ["z"]},
        ]
    )
    result = analytics.most_worn_this_month(outfits, 2025, 5)
    assert result is not None
    assert result.signature == "z"
    assert result.outfit.id == "x1"


def test_most_worn_this_month_ignores_garment_order(march_outfits: List[Outfit]) -> None:
    shuffled = [
        Outfit(id=o.id, user_id=o.user_id, date=o.date, garment_ids=tuple(reversed(o.garment_ids)))
        for o in march_outfits
    ]
    original = analytics.most_worn_this_month(march_outfits, 2025, 3)
    permuted = analytics.most_worn_this_month(shuffled, 2025, 3)

    assert original is not None and permuted is not None
    assert (original.signature, original.count) == (permuted.signature, permuted.count)


def test_outfit_without_garments_has_empty_signature() -> None:
    outfit = Outfit(id="o", user_id="u", date=date(2025, 1, 1))
    assert analytics.outfit_signature(outfit) == ""


def test_category_breakdown_empty() -> None:
    assert analytics.category_breakdown([]) == []
    assert analytics.colour_breakdown([]) == []


def test_category_breakdown_orders_by_count_then_name() -> None:
    garments = [
        _garment("1", "tops"),
        _garment("2", "tops"),
        _garment("3", "shoes"),
        _garment("4", "bags"),
    ]
    stats = analytics.category_breakdown(garments)

    assert [(s.name, s.count, s.percent) for s in stats] == [
        ("tops", 2, 50),
        ("bags", 1, 25),
        ("shoes", 1, 25),
    ]


def test_breakdown_percentages_sum_to_about_100() -> None:
    garments = [_garment(str(i), category, color) for i, (category, color) in enumerate(
        [("tops", "black"), ("bottoms", "blue"), ("shoes", "white")]
    )]
    for stats in (analytics.category_breakdown(garments), analytics.colour_breakdown(garments)):
        total = sum(s.percent for s in stats)
        assert 100 - len(stats) <= total <= 100 + len(stats)
        assert [s.percent for s in stats] == [33, 33, 33]


def test_percent_rounds_half_up() -> None:
    assert analytics.percent_of(1, 8) == 13
    assert analytics.percent_of(1, 200) == 1
    assert analytics.percent_of(0, 0) == 0


def test_colour_breakdown_labels_and_hex() -> None:
    garments = [_garment("1", color="navy"), _garment("2", color="navy"), _garment("3", color="unknown")]
    stats = analytics.colour_breakdown(garments)

    assert stats[0].colour == "navy"
    assert stats[0].label == "Navy"
    assert stats[0].hex == "#1F2A44"
    assert stats[0].percent == 67
    assert stats[1].colour == "unknown"
    assert stats[1].hex is None
    assert analytics.top_colours(stats) == ["Navy", "Unknown"]
    assert analytics.top_colours(stats, n=1) == ["Navy"]


def test_overview_counts_usage_and_outfits() -> None:
    garments = [_garment("g1", wear_count=2), _garment("g2", wear_count=0), _garment("g3", wear_count=1)]
    outfits = [
        Outfit(id="o1", user_id="user-1", date=date(2025, 3, 1), garment_ids=("g1", "g3")),
        Outfit(id="o2", user_id="user-1", date=date(2025, 3, 2), garment_ids=("g2",)),
    ]
    usages = [
        _usage("u1", "g1", "o1"),
        _usage("u2", "g3", "o1"),
        _usage("u3", "g1"),
        _usage("u4", "g1", "deleted-outfit"),
    ]
    stats = analytics.overview(garments, outfits, usages)

    assert stats.total_items == 3
    assert stats.wardrobe_usage_percent == 67
    assert stats.total_outfits == 2
    assert stats.outfits_worn == 1
    assert stats.outfit_percent == 50


def test_overview_empty_wardrobe() -> None:
    stats = analytics.overview([], [], [])
    assert stats.total_items == 0
    assert stats.wardrobe_usage_percent == 0
    assert stats.outfit_percent == 0


def test_worn_lists() -> None:
    garments = [
        _garment("a", wear_count=5),
        _garment("b", wear_count=1),
        _garment("c", wear_count=0),
        _garment("d", wear_count=5),
        _garment("e", wear_count=3),
        _garment("f", wear_count=0),
    ]

    assert [w.id for w in analytics.most_worn(garments)] == ["a", "d", "e", "b"]
    assert [w.id for w in analytics.least_worn(garments)] == ["b", "e", "a", "d"]
    assert [w.id for w in analytics.never_worn(garments)] == ["c", "f"]
    assert [w.id for w in analytics.most_worn(garments, limit=2)] == ["a", "d"]
    assert analytics.most_worn([]) == []


@pytest.mark.parametrize("limit", [0, -1, True])
def test_worn_lists_reject_bad_limit(limit) -> None:
    with pytest.raises(ValueError):
        analytics.most_worn([], limit=limit)


def test_reconstruct_wear_counts_and_mismatches() -> None:
    usages = [_usage("u1", "g1"), _usage("u2", "g1"), _usage("u3", "g2"), _usage("u4", "ghost")]
    garments = [_garment("g1", wear_count=2), _garment("g2", wear_count=3), _garment("g3", wear_count=0)]

    assert analytics.reconstruct_wear_counts(usages) == {"g1": 2, "g2": 1, "ghost": 1}
    mismatches = analytics.wear_count_mismatches(garments, usages)
    assert [(m.garment_id, m.stored, m.reconstructed) for m in mismatches] == [("g2", 3, 1)]
    assert analytics.reconstruct_wear_counts([]) == {}


def test_aggregations_do_not_mutate_inputs(march_outfits: List[Outfit]) -> None:
    snapshot = list(march_outfits)
    garments = [_garment("b", wear_count=1), _garment("a", wear_count=2)]
    garments_before = list(garments)

    analytics.most_worn_this_month(march_outfits, 2025, 3)
    analytics.category_breakdown(garments)
    analytics.most_worn(garments)

    assert march_outfits == snapshot
    assert garments == garments_before
