"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from mealgen.adapters.food_search_client import FoodSearchClient
from mealgen.config import Settings
from mealgen.domain.nutrition import FoodCandidate, NutrientVector, Serving
from mealgen.services.lookup import NutritionLookup


def make_serving(  # noqa: PLR0913
    serving_id: str = "100g",
    measurement_description: str = "g",
    amount: float | None = 100.0,
    calories: float | None = 100.0,
    protein: float | None = 0.0,
    carbohydrate: float | None = 0.0,
    fat: float | None = 0.0,
    **nutrients: float | None,
) -> Serving:
    return Serving(
        serving_id=serving_id,
        serving_description=f"{amount} {measurement_description}",
        measurement_description=measurement_description,
        metric_serving_amount=amount,
        metric_serving_unit="g",
        number_of_units=1.0,
        nutrients=NutrientVector(
            calories=calories,
            protein=protein,
            carbohydrate=carbohydrate,
            fat=fat,
            **nutrients,
        ),
    )


def make_candidate(name: str, *servings: Serving) -> FoodCandidate:
    return FoodCandidate(
        food_id=f"id-{name.lower().replace(' ', '-')}",
        food_name=name,
        food_type="Generic",
        brand_name="",
        servings=tuple(servings),
    )


def scenario_candidates() -> dict[str, FoodCandidate]:
    """Per-100 g tables for the chicken, rice, broccoli and avocado meal."""
    return {
        "Chicken Breast": make_candidate(
            "Chicken Breast",
            make_serving(
                serving_id="breast",
                measurement_description="breast",
                amount=150.0,
                calories=375.0,
                protein=28.5,
                carbohydrate=15.0,
                fat=15.0,
            ),
            make_serving(calories=250.0, protein=19.0, carbohydrate=10.0, fat=10.0),
        ),
        "Brown Rice": make_candidate(
            "Brown Rice",
            make_serving(calories=112.0, protein=2.32, carbohydrate=23.51, fat=0.83),
        ),
        "Broccoli": make_candidate(
            "Broccoli",
            make_serving(
                measurement_description="grams",
                calories=34.0,
                protein=2.82,
                carbohydrate=6.64,
                fat=0.37,
                fiber=2.6,
            ),
        ),
        "Avocado": make_candidate(
            "Avocado",
            make_serving(
                serving_id="cup",
                measurement_description="cup",
                amount=150.0,
                calories=240.0,
                protein=3.0,
                carbohydrate=12.8,
                fat=22.0,
            ),
            make_serving(calories=160.0, protein=2.0, carbohydrate=8.53, fat=14.66),
        ),
    }


@dataclass
class FakeNutritionLookup(NutritionLookup):
    """In-memory lookup that records calls and in-flight concurrency."""

    records: dict[str, FoodCandidate] = field(default_factory=dict)
    failing: set[str] = field(default_factory=set)
    slow: set[str] = field(default_factory=set)
    delay_seconds: float = 0.0
    calls: list[str] = field(default_factory=list)
    active: int = 0
    max_active: int = 0

    async def search(self, food_name: str) -> FoodCandidate | None:
        self.calls.append(food_name)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if food_name in self.slow:
                await asyncio.sleep(5)
            elif self.delay_seconds:
                await asyncio.sleep(self.delay_seconds)
            if food_name in self.failing:
                raise RuntimeError(f"lookup failed for {food_name}")
            return self.records.get(food_name)
        finally:
            self.active -= 1


@dataclass
class FakeFoodSearchClient(FoodSearchClient):
    """Fake search client returning raw API data."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "provider_name": "test",
            "search_tag": "oats",
            "foods": [
                {
                    "food_id": "42",
                    "food_name": "Rolled Oats",
                    "food_type": "Generic",
                    "brand_name": "",
                    "servings": [
                        {
                            "serving_id": "1",
                            "serving_description": "100 g",
                            "measurement_description": "g",
                            "metric_serving_amount": "100.000",
                            "metric_serving_unit": "g",
                            "number_of_units": "1.000",
                            "calories": "379",
                            "protein": "13.15",
                            "carbohydrate": "67.7",
                            "fat": "6.52",
                            "fiber": "10.1",
                            "sugar": "",
                            "sodium": "n/a",
                        }
                    ],
                },
                {"food_id": "43", "food_name": "Oat Milk", "servings": []},
            ],
        }
    )
    queries: list[str] = field(default_factory=list)

    async def search_food(self, food_name: str) -> dict[str, object]:
        self.queries.append(food_name)
        return self.search_payload

    async def search_barcode(
        self, barcode: str, page_number: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        self.queries.append(barcode)
        return self.search_payload


@pytest.fixture
def settings() -> Settings:
    return Settings(food_api_key="food-key")


@pytest.fixture
def lookup() -> FakeNutritionLookup:
    return FakeNutritionLookup(records=scenario_candidates())
