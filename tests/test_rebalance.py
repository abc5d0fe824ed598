"""Tests for macro rebalancing."""

import pytest

from mealgen.domain.nutrition import MacroTarget, OptimizedFood
from mealgen.services.macros import aggregate_macros
from mealgen.services.rebalance import (
    MacroRebalancer,
    find_fat_source_index,
    find_starchy_carb_indexes,
)
from tests.conftest import make_candidate, make_serving


def _food(name: str, **kwargs) -> OptimizedFood:
    serving = make_serving(**kwargs)
    return OptimizedFood(
        name=name, candidate=make_candidate(name, serving), serving=serving
    )


def test_fat_source_prefers_whole_food_fats() -> None:
    foods = [
        _food("Grilled Salmon"),
        _food("Spinach"),
        _food("Sliced Almonds"),
    ]

    assert find_fat_source_index(foods) == 2


def test_fat_source_falls_back_to_high_fat_protein() -> None:
    foods = [_food("Spinach"), _food("Scrambled Eggs"), _food("Lean Beef")]

    assert find_fat_source_index(foods) == 1
    assert find_fat_source_index([_food("Spinach")]) is None


def test_starchy_carb_indexes() -> None:
    foods = [_food("Sweet Potato"), _food("Chicken"), _food("Whole Wheat Bread")]

    assert find_starchy_carb_indexes(foods) == [0, 2]


def test_fat_increase_is_capped_per_pass() -> None:
    foods = [_food("Almonds", amount=10.0, calories=58.0, fat=5.0)]
    target = MacroTarget(calories=500.0, carbs=0.0, proteins=0.0, fats=30.0)

    adjusted = MacroRebalancer().rebalance(foods, target)

    assert adjusted[0].serving.nutrients.fat == pytest.approx(12.8)
    assert adjusted[0].serving.metric_serving_amount == pytest.approx(25.6)


def test_fat_increase_scales_with_deficit() -> None:
    foods = [
        _food("Avocado", calories=100.0, fat=10.0),
        _food("Turkey", calories=100.0, fat=8.0),
    ]
    target = MacroTarget(calories=200.0, fats=20.0)

    adjusted = MacroRebalancer(max_passes=1).rebalance(foods, target)

    # deficit 1.0g over 10g of avocado fat -> +8%
    assert adjusted[0].serving.nutrients.fat == pytest.approx(10.8)
    assert adjusted[1] == foods[1]


def test_zero_fat_source_is_left_alone() -> None:
    foods = [_food("Chia Pudding", fat=0.0)]
    target = MacroTarget(fats=20.0)

    assert MacroRebalancer().rebalance(foods, target) == foods


def test_carb_excess_trims_starchy_foods() -> None:
    foods = [
        _food("White Rice", calories=300.0, carbohydrate=66.0, fat=0.6),
        _food("Chicken", calories=200.0, carbohydrate=0.0),
    ]
    target = MacroTarget(calories=500.0, carbs=40.0)

    adjusted = MacroRebalancer().rebalance(foods, target)

    assert aggregate_macros(adjusted).carbs == pytest.approx(42.0)
    assert adjusted[1] == foods[1]


def test_carb_reduction_is_capped_per_pass() -> None:
    foods = [_food("Pasta", calories=400.0, carbohydrate=80.0)]
    target = MacroTarget(carbs=10.0)

    adjusted = MacroRebalancer(max_passes=1).rebalance(foods, target)

    assert adjusted[0].serving.nutrients.carbohydrate == pytest.approx(52.0)


def test_within_tolerance_is_unchanged() -> None:
    foods = [
        _food("Oatmeal", carbohydrate=58.0, fat=5.0),
        _food("Walnuts", carbohydrate=2.0, fat=14.5),
    ]
    target = MacroTarget(carbs=60.0, fats=20.0)

    assert MacroRebalancer().rebalance(foods, target) == foods


def test_passes_are_configurable() -> None:
    foods = [_food("Almonds", fat=5.0)]
    target = MacroTarget(fats=100.0)

    assert MacroRebalancer(max_passes=0).rebalance(foods, target) == foods
    three = MacroRebalancer(max_passes=3).rebalance(foods, target)
    assert three[0].serving.nutrients.fat == pytest.approx(5.0 * 1.6**3)


def test_rebalancing_does_not_increase_deviation() -> None:
    foods = [
        _food(
            "Chicken Breast", calories=200.0, protein=15.2, carbohydrate=8.0, fat=8.0
        ),
        _food("Brown Rice", calories=150.0, protein=3.1, carbohydrate=31.5, fat=1.1),
        _food("Avocado", calories=75.0, protein=0.9, carbohydrate=4.0, fat=6.9),
    ]
    target = MacroTarget(calories=500.0, carbs=40.0, proteins=25.0, fats=20.0)
    before = aggregate_macros(foods)

    after = aggregate_macros(MacroRebalancer().rebalance(foods, target))

    assert abs(after.fats - target.fats) <= abs(before.fats - target.fats)
    assert abs(after.carbs - target.carbs) <= abs(before.carbs - target.carbs)
