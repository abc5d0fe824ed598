"""Nutrition lookup over the food search API."""

import logging
from dataclasses import dataclass
from typing import Protocol

from mealgen.adapters.food_search_client import FoodSearchClient
from mealgen.domain.nutrition import (
    NUTRIENT_FIELDS,
    FoodCandidate,
    NutrientVector,
    Serving,
)

_logger = logging.getLogger(__name__)


class NutritionLookup(Protocol):
    """Resolves a food name to its best nutrition record."""

    async def search(self, food_name: str) -> FoodCandidate | None:
        """Return the best candidate for the name, or None when nothing matched."""


@dataclass
class FoodLookupService(NutritionLookup):
    """Nutrition lookup backed by a food search client."""

    client: FoodSearchClient
    debug: bool = False

    async def search(self, food_name: str) -> FoodCandidate | None:
        """Return the first food the API matched for the name."""
        payload = await self.client.search_food(food_name)
        candidates = parse_candidates(payload)
        if self.debug:
            _logger.info(
                "Food search: query=%s results=%s", food_name, len(candidates)
            )
        return candidates[0] if candidates else None

    async def search_barcode(
        self, barcode: str, page_number: int = 0, max_results: int = 20
    ) -> list[FoodCandidate]:
        """Return every food the API matched for a barcode."""
        payload = await self.client.search_barcode(
            barcode, page_number=page_number, max_results=max_results
        )
        return parse_candidates(payload)


def parse_candidates(payload: dict[str, object]) -> list[FoodCandidate]:
    """Convert a raw search result into food candidates."""
    foods = payload.get("foods") or []
    if not isinstance(foods, list):
        return []
    return [_parse_food(food) for food in foods if isinstance(food, dict)]


def parse_decimal(value: object) -> float | None:
    """Parse a decimal field; None when empty, 0.0 when malformed."""
    if value is None:
        return None
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            return float(cleaned)
        except ValueError:
            return 0.0
    return 0.0


def _parse_food(food: dict[str, object]) -> FoodCandidate:
    servings = food.get("servings") or []
    if not isinstance(servings, list):
        servings = []
    return FoodCandidate(
        food_id=_text(food.get("food_id")),
        food_name=_text(food.get("food_name")),
        food_type=_text(food.get("food_type")),
        brand_name=_text(food.get("brand_name")),
        servings=tuple(
            _parse_serving(serving) for serving in servings if isinstance(serving, dict)
        ),
    )


def _parse_serving(serving: dict[str, object]) -> Serving:
    return Serving(
        serving_id=_text(serving.get("serving_id")),
        serving_description=_text(serving.get("serving_description")),
        measurement_description=_text(serving.get("measurement_description")),
        metric_serving_amount=parse_decimal(serving.get("metric_serving_amount")),
        metric_serving_unit=_text(serving.get("metric_serving_unit")),
        number_of_units=parse_decimal(serving.get("number_of_units")),
        nutrients=NutrientVector(
            **{name: parse_decimal(serving.get(name)) for name in NUTRIENT_FIELDS}
        ),
    )


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()
