"""Meal macro aggregation."""

from collections.abc import Iterable

from mealgen.domain.nutrition import MacroTarget, OptimizedFood


def aggregate_macros(foods: Iterable[OptimizedFood]) -> MacroTarget:
    """Sum calories, carbs, protein and fat across the foods' servings."""
    calories = carbs = proteins = fats = 0.0
    for food in foods:
        nutrients = food.serving.nutrients
        calories += nutrients.value("calories")
        carbs += nutrients.value("carbohydrate")
        proteins += nutrients.value("protein")
        fats += nutrients.value("fat")
    return MacroTarget(calories=calories, carbs=carbs, proteins=proteins, fats=fats)
