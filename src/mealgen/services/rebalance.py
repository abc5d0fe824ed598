"""Bounded macro rebalancing for optimized meals."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from mealgen.domain.classification import FoodCategory, is_in_category
from mealgen.domain.nutrition import MacroTarget, OptimizedFood
from mealgen.services.macros import aggregate_macros
from mealgen.services.portions import scale_serving

_logger = logging.getLogger(__name__)


@dataclass
class MacroRebalancer:
    """Nudges fat sources up and starchy carbs down over a fixed number of passes.

    This is a heuristic corrector, not a solver: it always runs ``max_passes``
    passes and caps each pass's change so portions stay realistic.
    """

    max_passes: int = 2
    tolerance: float = 0.05
    max_fat_increase: float = 0.6
    fat_step_weight: float = 0.8
    max_carb_reduction: float = 0.35

    def rebalance(
        self, foods: Sequence[OptimizedFood], target: MacroTarget
    ) -> list[OptimizedFood]:
        """Return the foods with fat deficit and carb excess corrections applied."""
        adjusted = list(foods)
        for _ in range(self.max_passes):
            totals = aggregate_macros(adjusted)
            adjusted = self._correct_fat_deficit(adjusted, target, totals)
            adjusted = self._correct_carb_excess(adjusted, target, totals)
        return adjusted

    def _correct_fat_deficit(
        self,
        foods: list[OptimizedFood],
        target: MacroTarget,
        totals: MacroTarget,
    ) -> list[OptimizedFood]:
        lower_bound = target.fats * (1.0 - self.tolerance)
        if totals.fats >= lower_bound:
            return foods
        index = find_fat_source_index(foods)
        if index is None:
            return foods
        fat_per_serving = foods[index].serving.nutrients.value("fat")
        if fat_per_serving <= 0:
            return foods

        deficit = lower_bound - totals.fats
        factor = 1.0 + min(
            self.max_fat_increase, deficit / fat_per_serving * self.fat_step_weight
        )
        _logger.debug(
            "Raising %r by x%.3f for a %.3fg fat deficit",
            foods[index].name,
            factor,
            deficit,
        )
        return _scale_at(foods, [index], factor)

    def _correct_carb_excess(
        self,
        foods: list[OptimizedFood],
        target: MacroTarget,
        totals: MacroTarget,
    ) -> list[OptimizedFood]:
        upper_bound = target.carbs * (1.0 + self.tolerance)
        if totals.carbs <= upper_bound:
            return foods
        indexes = find_starchy_carb_indexes(foods)
        starchy_carbs = sum(
            foods[index].serving.nutrients.value("carbohydrate") for index in indexes
        )
        if starchy_carbs <= 0:
            return foods

        excess = totals.carbs - upper_bound
        reduction = min(self.max_carb_reduction, excess / starchy_carbs)
        _logger.debug(
            "Trimming %s starchy foods by %.1f%% for a %.3fg carb excess",
            len(indexes),
            reduction * 100,
            excess,
        )
        return _scale_at(foods, indexes, 1.0 - reduction)


def find_fat_source_index(foods: Sequence[OptimizedFood]) -> int | None:
    """Return the first whole-food fat, else the first high-fat protein."""
    for category in (FoodCategory.WHOLE_FOOD_FAT, FoodCategory.HIGH_FAT_PROTEIN):
        for index, food in enumerate(foods):
            if is_in_category(food.name, category):
                return index
    return None


def find_starchy_carb_indexes(foods: Sequence[OptimizedFood]) -> list[int]:
    """Return the positions of every starchy carb in the meal."""
    return [
        index
        for index, food in enumerate(foods)
        if is_in_category(food.name, FoodCategory.STARCHY_CARB)
    ]


def _scale_at(
    foods: list[OptimizedFood], indexes: Sequence[int], factor: float
) -> list[OptimizedFood]:
    if factor <= 0:
        return foods
    selected = set(indexes)
    return [
        replace(food, serving=scale_serving(food.serving, factor))
        if index in selected
        else food
        for index, food in enumerate(foods)
    ]
