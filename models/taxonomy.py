"""Canonical taxonomy definitions for garments.

This module centralises the canonical labels for garment categories and colour
names. Documents in the store are written by several clients, so the helpers
here fold free-form labels onto one key before anything is grouped or counted.
"""

from typing import Dict, Iterable, List, Optional

UNKNOWN_COLOUR = "unknown"

CATEGORY_ALIASES: Dict[str, str] = {
    "top": "tops",
    "tops": "tops",
    "shirt": "tops",
    "shirts": "tops",
    "tee": "tops",
    "t_shirt": "tops",
    "blouse": "tops",
    "sweater": "tops",
    "hoodie": "tops",
    "bottom": "bottoms",
    "bottoms": "bottoms",
    "pants": "bottoms",
    "trousers": "bottoms",
    "jeans": "bottoms",
    "shorts": "bottoms",
    "skirt": "bottoms",
    "dress": "dresses",
    "dresses": "dresses",
    "jumpsuit": "dresses",
    "shoe": "shoes",
    "shoes": "shoes",
    "sneakers": "shoes",
    "boots": "shoes",
    "heels": "shoes",
    "bag": "bags",
    "bags": "bags",
    "handbag": "bags",
    "accessory": "accessories",
    "accessories": "accessories",
    "belt": "accessories",
    "hat": "accessories",
    "scarf": "accessories",
    "jewellery": "accessories",
    "jewelry": "accessories",
}

SEASON_TAGS = ["spring", "summer", "autumn", "winter", "all_year"]

SEASON_ALIASES: Dict[str, str] = {
    "fall": "autumn",
    "all_season": "all_year",
    "all_seasons": "all_year",
    "year_round": "all_year",
    "all": "all_year",
}

COLOR_MAP = {
    "navy blue": "navy",
    "navy": "navy",
    "light blue": "blue",
    "sky blue": "blue",
    "blue": "blue",
    "black": "black",
    "white": "white",
    "off white": "white",
    "cream": "beige",
    "beige": "beige",
    "tan": "beige",
    "brown": "brown",
    "gray": "grey",
    "grey": "grey",
    "green": "green",
    "olive": "green",
    "red": "red",
    "burgundy": "red",
    "pink": "pink",
    "yellow": "yellow",
    "orange": "orange",
    "purple": "purple",
}

COLOUR_HEX: Dict[str, str] = {
    "navy": "#1F2A44",
    "blue": "#4A90D9",
    "black": "#000000",
    "white": "#FFFFFF",
    "beige": "#E8D8C3",
    "brown": "#7B4B2A",
    "grey": "#9E9E9E",
    "green": "#4CAF50",
    "red": "#D32F2F",
    "pink": "#FB92BD",
    "yellow": "#FFD54F",
    "orange": "#FF9800",
    "purple": "#9C27B0",
}


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "_").replace("-", "_")


def normalize_category(value: str) -> str:
    """Fold a category label onto its canonical key.

    Labels outside the alias table are kept as their normalised key so that
    user-defined categories still group together.
    """

    key = _normalize_key(value)
    return CATEGORY_ALIASES.get(key, key)


def normalize_color_name(raw_string: Optional[str]) -> str:
    """Map a raw color string to a canonical color name."""

    if raw_string is None:
        return UNKNOWN_COLOUR
    key = raw_string.strip().lower()
    if not key:
        return UNKNOWN_COLOUR
    return COLOR_MAP.get(key, key)


def colour_label(colour: str) -> str:
    """Human readable label for a canonical colour key."""

    return colour.replace("_", " ").title()


def normalise_tags(
    values: Iterable[str], allowed: List[str], aliases: Optional[Dict[str, str]] = None
) -> List[str]:
    """Normalise and deduplicate tags against an allowed set.

    Aliases are folded first (``fall`` -> ``autumn``); tags still outside
    ``allowed`` are dropped.
    """

    aliases = aliases or {}
    normalised = []
    seen = set()
    for value in values:
        key = _normalize_key(value)
        key = aliases.get(key, key)
        if key in allowed and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


__all__ = [
    "CATEGORY_ALIASES",
    "COLOUR_HEX",
    "SEASON_ALIASES",
    "SEASON_TAGS",
    "UNKNOWN_COLOUR",
    "colour_label",
    "normalize_category",
    "normalize_color_name",
    "normalise_tags",
]
