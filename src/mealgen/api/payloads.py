"""Pydantic models and serializers for meal plan payloads."""

from pydantic import BaseModel, Field

from mealgen.domain.nutrition import (
    NUTRIENT_FIELDS,
    MacroTarget,
    MealResult,
    OptimizedFood,
    PortionedFoodRequest,
    Serving,
)
from mealgen.domain.plans import (
    MealPlan,
    MealRegeneration,
    OriginalMeal,
    PlanDay,
    PlannedMeal,
    PlanResult,
    RegenerationResult,
    TimingInfo,
)
from mealgen.domain.recipes import RecipeGuide, RecipeSection


class MacroTargetPayload(BaseModel):
    """Calories and macro grams for a meal."""

    calories: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0
    proteins: float = 0.0


class RecipeSectionPayload(BaseModel):
    """Titled group of recipe steps."""

    title: str = ""
    subtitle: str = ""
    steps: list[str] = Field(default_factory=list)


class RecipeSectionsPayload(BaseModel):
    """Prepare, cook and weigh-and-assemble sections, all optional."""

    prepare: list[RecipeSectionPayload] = Field(default_factory=list)
    cook: list[RecipeSectionPayload] = Field(default_factory=list)
    weight_assemble: list[RecipeSectionPayload] = Field(default_factory=list)


class FoodPortionPayload(BaseModel):
    """Food name with its portion ratio."""

    name: str
    portion_ratio: int = 0


class MealPayload(RecipeSectionsPayload):
    """Meal produced by the plan generator."""

    meal_name: str = ""
    meal_time: str = ""
    meridiem: str = ""
    macro_target: MacroTargetPayload = Field(default_factory=MacroTargetPayload)
    foods: list[FoodPortionPayload] = Field(default_factory=list)


class DayPayload(BaseModel):
    """Meals produced for one day."""

    date: str = ""
    meals: list[MealPayload] = Field(default_factory=list)


class MealPlanPayload(RecipeSectionsPayload):
    """Multi-day plan produced by the plan generator."""

    success: bool = True
    message: str = ""
    data: dict[str, DayPayload] = Field(default_factory=dict)


class OriginalMealPayload(BaseModel):
    """Meal slot being regenerated, as sent by the caller."""

    meal_name: str = ""
    meal_time: str = ""
    meridiem: str = ""
    macro_target: MacroTargetPayload = Field(default_factory=MacroTargetPayload)


class RegenerationPayload(RecipeSectionsPayload):
    """Single replacement meal produced by the plan generator."""

    success: bool = True
    message: str = ""
    data: MealPayload = Field(default_factory=MealPayload)


def to_planned_meal(
    payload: MealPayload, recipe: RecipeGuide | None = None
) -> PlannedMeal:
    """Convert a meal payload into a planned meal."""
    return PlannedMeal(
        meal_name=payload.meal_name,
        meal_time=payload.meal_time,
        meridiem=payload.meridiem,
        macro_target=_to_macro_target(payload.macro_target),
        foods=[
            PortionedFoodRequest(name=food.name, portion_ratio=food.portion_ratio)
            for food in payload.foods
        ],
        recipe=recipe or to_recipe_guide(payload),
    )


def to_meal_plan(payload: MealPlanPayload) -> MealPlan:
    """Convert a plan payload into a meal plan."""
    return MealPlan(
        days={
            key: PlanDay(
                date=day.date, meals=[to_planned_meal(meal) for meal in day.meals]
            )
            for key, day in payload.data.items()
        },
        message=payload.message,
        recipe=to_recipe_guide(payload),
    )


def to_meal_regeneration(
    payload: RegenerationPayload, original: OriginalMealPayload
) -> MealRegeneration:
    """Pair a replacement meal with the slot it replaces.

    The generator sends recipe sections next to the meal rather than inside
    it, so they are attached to the planned meal here.
    """
    return MealRegeneration(
        meal=to_planned_meal(payload.data, recipe=to_recipe_guide(payload)),
        original=OriginalMeal(
            meal_name=original.meal_name,
            meal_time=original.meal_time,
            meridiem=original.meridiem,
            macro_target=_to_macro_target(original.macro_target),
        ),
        message=payload.message,
    )


def to_recipe_guide(payload: RecipeSectionsPayload) -> RecipeGuide:
    """Convert recipe section payloads into a recipe guide."""
    return RecipeGuide(
        prepare=[_to_section(section) for section in payload.prepare],
        cook=[_to_section(section) for section in payload.cook],
        weight_assemble=[_to_section(section) for section in payload.weight_assemble],
    )


def serving_payload(serving: Serving) -> dict[str, str]:
    """Render a serving with decimals fixed to three places."""
    payload = {
        "serving_id": serving.serving_id,
        "serving_description": serving.serving_description,
        "measurement_description": serving.measurement_description,
        "metric_serving_amount": _decimal(serving.metric_serving_amount),
        "metric_serving_unit": serving.metric_serving_unit,
        "number_of_units": _decimal(serving.number_of_units),
    }
    for name in NUTRIENT_FIELDS:
        payload[name] = _decimal(serving.nutrients.value(name))
    return payload


def food_payload(food: OptimizedFood) -> dict[str, object]:
    """Render an optimized food with its single selected serving."""
    return {
        "food_id": food.candidate.food_id,
        "food_name": food.candidate.food_name or food.name,
        "food_type": food.candidate.food_type,
        "brand_name": food.candidate.brand_name,
        "servings": [serving_payload(food.serving)],
    }


def macro_payload(macros: MacroTarget) -> dict[str, float]:
    """Render a macro total."""
    return {
        "calories": macros.calories,
        "carbs": macros.carbs,
        "fats": macros.fats,
        "proteins": macros.proteins,
    }


def recipe_payload(recipe: RecipeGuide) -> dict[str, object]:
    """Render the non-empty recipe sections."""
    sections = {
        "prepare": recipe.prepare,
        "cook": recipe.cook,
        "weight_assemble": recipe.weight_assemble,
    }
    return {
        key: [
            {
                "title": section.title,
                "subtitle": section.subtitle,
                "steps": list(section.steps),
            }
            for section in value
        ]
        for key, value in sections.items()
        if value
    }


def meal_result_payload(result: MealResult) -> dict[str, object]:
    """Render an optimized meal for the response formatter."""
    return _meal_fields(result) | recipe_payload(result.recipe)


def plan_result_payload(result: PlanResult) -> dict[str, object]:
    """Render an optimized plan with its step timings."""
    payload: dict[str, object] = {
        "success": True,
        "message": result.message,
        "data": {
            key: {
                "date": day.date,
                "meals": [meal_result_payload(meal) for meal in day.meals],
            }
            for key, day in result.days.items()
        },
    }
    if result.timing is not None:
        payload["timing"] = _timing_payload(result.timing)
    payload.update(recipe_payload(result.recipe))
    return payload


def regeneration_result_payload(result: RegenerationResult) -> dict[str, object]:
    """Render a regenerated meal with its recipe sections at the top level."""
    payload: dict[str, object] = {
        "success": True,
        "message": result.message,
        "data": _meal_fields(result.meal),
    }
    if result.timing is not None:
        payload["timing"] = _timing_payload(result.timing)
    payload.update(recipe_payload(result.meal.recipe))
    return payload


def _meal_fields(result: MealResult) -> dict[str, object]:
    return {
        "meal_name": result.meal_name,
        "meal_time": result.meal_time,
        "meridiem": result.meridiem,
        "macro_target": macro_payload(result.macro_target),
        "macros": macro_payload(result.macros),
        "foods": [food_payload(food) for food in result.foods],
    }


def _timing_payload(timing: TimingInfo) -> dict[str, str]:
    return {
        "total_duration": timing.total_duration,
        "data_collection_time": timing.data_collection_time,
        "food_fetching_time": timing.food_fetching_time,
        "serving_optimization_time": timing.serving_optimization_time,
        "response_build_time": timing.response_build_time,
    }


def _to_macro_target(payload: MacroTargetPayload) -> MacroTarget:
    return MacroTarget(
        calories=payload.calories,
        carbs=payload.carbs,
        proteins=payload.proteins,
        fats=payload.fats,
    )


def _to_section(payload: RecipeSectionPayload) -> RecipeSection:
    return RecipeSection(
        title=payload.title, subtitle=payload.subtitle, steps=list(payload.steps)
    )


def _decimal(value: float | None) -> str:
    return f"{value if value is not None else 0.0:.3f}"
