"""Nutrition domain models."""

from dataclasses import dataclass, field, replace

from mealgen.domain.recipes import RecipeGuide

NUTRIENT_FIELDS: tuple[str, ...] = (
    "calories",
    "protein",
    "carbohydrate",
    "fat",
    "sugar",
    "fiber",
    "saturated_fat",
    "monounsaturated_fat",
    "polyunsaturated_fat",
    "cholesterol",
    "sodium",
    "potassium",
    "calcium",
    "iron",
    "vitamin_a",
    "vitamin_b",
    "vitamin_c",
    "vitamin_d",
)


@dataclass(frozen=True)
class NutrientVector:
    """Per-serving nutrient amounts.

    ``None`` marks a field that was missing in the lookup record. Malformed
    values are already 0.0 by the time they land here.
    """

    calories: float | None = None
    protein: float | None = None
    carbohydrate: float | None = None
    fat: float | None = None
    sugar: float | None = None
    fiber: float | None = None
    saturated_fat: float | None = None
    monounsaturated_fat: float | None = None
    polyunsaturated_fat: float | None = None
    cholesterol: float | None = None
    sodium: float | None = None
    potassium: float | None = None
    calcium: float | None = None
    iron: float | None = None
    vitamin_a: float | None = None
    vitamin_b: float | None = None
    vitamin_c: float | None = None
    vitamin_d: float | None = None

    def value(self, name: str) -> float:
        """Return a nutrient amount, treating missing values as zero."""
        amount = getattr(self, name)
        return amount if amount is not None else 0.0

    def is_complete(self) -> bool:
        """Return True when no nutrient field is missing."""
        return all(getattr(self, name) is not None for name in NUTRIENT_FIELDS)

    def filled(self) -> "NutrientVector":
        """Return a copy with every missing field set to zero."""
        return replace(self, **{name: self.value(name) for name in NUTRIENT_FIELDS})

    def scaled(self, factor: float) -> "NutrientVector":
        """Return a copy with every field multiplied by factor."""
        return NutrientVector(
            **{name: self.value(name) * factor for name in NUTRIENT_FIELDS}
        )


@dataclass(frozen=True)
class Serving:
    """One serving option of a food with its nutrients."""

    serving_id: str
    serving_description: str
    measurement_description: str
    metric_serving_amount: float | None
    metric_serving_unit: str
    number_of_units: float | None
    nutrients: NutrientVector


@dataclass(frozen=True)
class FoodCandidate:
    """Best lookup match for a food name."""

    food_id: str
    food_name: str
    food_type: str
    brand_name: str
    servings: tuple[Serving, ...]


@dataclass(frozen=True)
class PortionedFoodRequest:
    """Food requested by the plan source with its share of meal calories."""

    name: str
    portion_ratio: int


@dataclass(frozen=True)
class MacroTarget:
    """Calories and macronutrient grams for a meal."""

    calories: float = 0.0
    carbs: float = 0.0
    proteins: float = 0.0
    fats: float = 0.0


@dataclass(frozen=True)
class OptimizedFood:
    """A resolved food with its single selected serving."""

    name: str
    candidate: FoodCandidate
    serving: Serving


@dataclass(frozen=True)
class MealResult:
    """Optimized foods for one meal and their aggregated macros."""

    meal_name: str
    meal_time: str
    meridiem: str
    macro_target: MacroTarget
    macros: MacroTarget
    foods: list[OptimizedFood]
    recipe: RecipeGuide = field(default_factory=RecipeGuide)
