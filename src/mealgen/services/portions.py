"""Portion scaling of canonical servings."""

from collections.abc import Sequence
from dataclasses import replace

from mealgen.domain.nutrition import OptimizedFood, PortionedFoodRequest, Serving


def scale_serving(serving: Serving, factor: float) -> Serving:
    """Return a serving with its gram amount and every nutrient multiplied."""
    amount = serving.metric_serving_amount or 0.0
    return replace(
        serving,
        metric_serving_amount=amount * factor,
        nutrients=serving.nutrients.scaled(factor),
    )


def portion_ratio_for(
    name: str, requests: Sequence[PortionedFoodRequest], food_count: int = 0
) -> int:
    """Return the requested ratio for a food, or an equal split when unmatched."""
    lowered = name.casefold()
    for request in requests:
        if request.name.casefold() == lowered:
            return request.portion_ratio
    divisor = len(requests) or food_count
    return 100 // divisor if divisor else 100


def target_calories_for(meal_target_calories: float, portion_ratio: int) -> float:
    """Return the share of the meal's calories assigned to one food."""
    return meal_target_calories * portion_ratio / 100.0


def scale_to_target_calories(serving: Serving, target_calories: float) -> Serving:
    """Scale a serving so its calories equal the target.

    Servings with zero or missing calories or gram amount are returned as-is.
    """
    current_calories = serving.nutrients.calories
    current_amount = serving.metric_serving_amount
    if not current_calories or not current_amount:
        return serving
    return scale_serving(serving, target_calories / current_calories)


def scale_to_portions(
    foods: Sequence[OptimizedFood],
    requests: Sequence[PortionedFoodRequest],
    meal_target_calories: float,
) -> list[OptimizedFood]:
    """Scale every food's serving to its portion of the meal's calories."""
    scaled: list[OptimizedFood] = []
    for food in foods:
        ratio = portion_ratio_for(food.name, requests, food_count=len(foods))
        target = target_calories_for(meal_target_calories, ratio)
        scaled.append(
            replace(food, serving=scale_to_target_calories(food.serving, target))
        )
    return scaled
