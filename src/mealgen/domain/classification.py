"""Keyword-based food classification."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class KeywordSet:
    """Lowercase substrings that tag a food name."""

    label: str
    keywords: tuple[str, ...]

    def matches(self, name: str) -> bool:
        """Return True when any keyword occurs in the lowercased name."""
        lowered = name.lower()
        return any(keyword in lowered for keyword in self.keywords)


class FoodCategory(Enum):
    """Food categories used by the macro rebalancer (single source of truth)."""

    WHOLE_FOOD_FAT = KeywordSet(
        "whole_food_fat",
        (
            "avocado",
            "almond",
            "walnut",
            "pecan",
            "cashew",
            "pistachio",
            "hazelnut",
            "macadamia",
            "peanut",
            "nut butter",
            "peanut butter",
            "almond butter",
            "tahini",
            "sesame",
            "sunflower seed",
            "pumpkin seed",
            "chia",
            "flax",
            "hemp",
            "olive oil",
            "olives",
            "cheese",
        ),
    )
    HIGH_FAT_PROTEIN = KeywordSet(
        "high_fat_protein",
        ("salmon", "beef", "egg", "whole milk", "cheese"),
    )
    STARCHY_CARB = KeywordSet(
        "starchy_carb",
        (
            "rice",
            "oat",
            "oatmeal",
            "potato",
            "sweet potato",
            "pasta",
            "quinoa",
            "bread",
            "tortilla",
            "corn",
            "couscous",
            "barley",
        ),
    )


def is_in_category(name: str, category: FoodCategory) -> bool:
    """Return True when the food name carries a keyword of the category."""
    return category.value.matches(name)


def classify(name: str) -> set[FoodCategory]:
    """Return every category whose keywords occur in the food name."""
    return {category for category in FoodCategory if category.value.matches(name)}
