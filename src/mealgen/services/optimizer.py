"""Meal optimization pipeline."""

import logging
import time
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, field, replace

from mealgen.domain.nutrition import FoodCandidate, MealResult, OptimizedFood
from mealgen.domain.plans import (
    DayResult,
    MealPlan,
    MealRegeneration,
    PlannedMeal,
    PlanResult,
    RegenerationResult,
    TimingInfo,
)
from mealgen.services.macros import aggregate_macros
from mealgen.services.portions import scale_to_portions
from mealgen.services.rebalance import MacroRebalancer
from mealgen.services.resolver import ConcurrentFoodResolver, collect_food_names
from mealgen.services.servings import select_canonical_serving

_logger = logging.getLogger(__name__)

MICROSECOND_LIMIT = 0.001
MILLISECOND_LIMIT = 1.0


@dataclass
class MealOptimizer:
    """Turns planned meals into portioned, rebalanced meals."""

    resolver: ConcurrentFoodResolver
    rebalancer: MacroRebalancer = field(default_factory=MacroRebalancer)

    def build_meal(
        self, meal: PlannedMeal, candidates: Mapping[str, FoodCandidate | None]
    ) -> MealResult:
        """Run selection, scaling, rebalancing and aggregation for one meal."""
        foods: list[OptimizedFood] = []
        for request in meal.foods:
            candidate = candidates.get(request.name)
            if candidate is None:
                _logger.info(
                    "Dropping %r from %r: no nutrition data",
                    request.name,
                    meal.meal_name,
                )
                continue
            foods.append(
                OptimizedFood(
                    name=request.name,
                    candidate=candidate,
                    serving=select_canonical_serving(candidate.servings),
                )
            )

        foods = scale_to_portions(foods, meal.foods, meal.macro_target.calories)
        foods = self.rebalancer.rebalance(foods, meal.macro_target)
        return MealResult(
            meal_name=meal.meal_name,
            meal_time=meal.meal_time,
            meridiem=meal.meridiem,
            macro_target=meal.macro_target,
            macros=aggregate_macros(foods),
            foods=foods,
            recipe=meal.recipe,
        )

    async def optimize_meal(self, meal: PlannedMeal) -> MealResult:
        """Resolve and optimize a single meal."""
        candidates = await self.resolver.resolve(collect_food_names([meal]))
        result = self.build_meal(meal, candidates)
        _logger.info(
            "Optimized %r: calories=%.1f protein=%.1f carbs=%.1f fat=%.1f",
            meal.meal_name,
            result.macros.calories,
            result.macros.proteins,
            result.macros.carbs,
            result.macros.fats,
        )
        return result

    async def optimize_plan(self, plan: MealPlan) -> PlanResult:
        """Resolve every unique food once and optimize each meal of the plan."""
        total_start = time.perf_counter()
        names = collect_food_names(plan.meals())
        data_collection = time.perf_counter() - total_start

        fetching_start = time.perf_counter()
        candidates = await self.resolver.resolve(names)
        food_fetching = time.perf_counter() - fetching_start

        optimization_start = time.perf_counter()
        days = {
            key: DayResult(
                date=day.date,
                meals=[self.build_meal(meal, candidates) for meal in day.meals],
            )
            for key, day in plan.days.items()
        }
        serving_optimization = time.perf_counter() - optimization_start

        build_start = time.perf_counter()
        unresolved = _unresolved(candidates)
        response_build = time.perf_counter() - build_start
        timing = _timing_info(
            time.perf_counter() - total_start,
            data_collection,
            food_fetching,
            serving_optimization,
            response_build,
        )
        _logger.info(
            "Optimized plan: days=%s foods=%s unresolved=%s total=%s",
            len(days),
            len(names),
            len(unresolved),
            timing.total_duration,
        )
        return PlanResult(
            days=days,
            message=plan.message,
            timing=timing,
            unresolved_foods=unresolved,
            recipe=plan.recipe,
        )

    async def regenerate_meal(
        self, regeneration: MealRegeneration
    ) -> RegenerationResult:
        """Optimize a replacement meal and present it in the original meal's slot."""
        total_start = time.perf_counter()
        names = collect_food_names([regeneration.meal])
        data_collection = time.perf_counter() - total_start

        fetching_start = time.perf_counter()
        candidates = await self.resolver.resolve(names)
        food_fetching = time.perf_counter() - fetching_start

        optimization_start = time.perf_counter()
        built = self.build_meal(regeneration.meal, candidates)
        serving_optimization = time.perf_counter() - optimization_start

        build_start = time.perf_counter()
        original = regeneration.original
        meal = replace(
            built,
            meal_name=original.meal_name,
            meal_time=original.meal_time,
            meridiem=original.meridiem,
            macro_target=original.macro_target,
        )
        response_build = time.perf_counter() - build_start
        timing = _timing_info(
            time.perf_counter() - total_start,
            data_collection,
            food_fetching,
            serving_optimization,
            response_build,
        )
        _logger.info(
            "Regenerated %r: calories=%.1f target=%.1f total=%s",
            original.meal_name,
            meal.macros.calories,
            original.macro_target.calories,
            timing.total_duration,
        )
        return RegenerationResult(
            meal=meal,
            message=regeneration.message,
            timing=timing,
            unresolved_foods=_unresolved(candidates),
        )

    async def stream_plan(
        self, plan: MealPlan
    ) -> AsyncIterator[tuple[str, MealResult]]:
        """Yield optimized meals one by one, resolving the plan's foods up front."""
        candidates = await self.resolver.resolve(collect_food_names(plan.meals()))
        for key, day in plan.days.items():
            for meal in day.meals:
                yield key, self.build_meal(meal, candidates)


def format_duration(seconds: float) -> str:
    """Format a duration with a unit matching its magnitude."""
    if seconds < MICROSECOND_LIMIT:
        return f"{seconds * 1_000_000:.2f}µs"
    if seconds < MILLISECOND_LIMIT:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.2f}s"


def _timing_info(
    total: float,
    data_collection: float,
    food_fetching: float,
    serving_optimization: float,
    response_build: float,
) -> TimingInfo:
    return TimingInfo(
        total_duration=format_duration(total),
        data_collection_time=format_duration(data_collection),
        food_fetching_time=format_duration(food_fetching),
        serving_optimization_time=format_duration(serving_optimization),
        response_build_time=format_duration(response_build),
    )


def _unresolved(candidates: Mapping[str, FoodCandidate | None]) -> list[str]:
    return [name for name, candidate in candidates.items() if candidate is None]
