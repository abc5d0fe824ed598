"""Meal plan domain models."""

from dataclasses import dataclass, field

from mealgen.domain.nutrition import MacroTarget, MealResult, PortionedFoodRequest
from mealgen.domain.recipes import RecipeGuide


@dataclass(frozen=True)
class PlannedMeal:
    """A meal as described by the plan source."""

    meal_name: str
    macro_target: MacroTarget
    foods: list[PortionedFoodRequest]
    meal_time: str = ""
    meridiem: str = ""
    recipe: RecipeGuide = field(default_factory=RecipeGuide)


@dataclass(frozen=True)
class PlanDay:
    """Meals planned for one day."""

    date: str
    meals: list[PlannedMeal]


@dataclass(frozen=True)
class MealPlan:
    """A multi-day meal plan keyed by day label."""

    days: dict[str, PlanDay]
    message: str = ""
    recipe: RecipeGuide = field(default_factory=RecipeGuide)

    def meals(self) -> list[PlannedMeal]:
        """Return every planned meal in day order."""
        return [meal for day in self.days.values() for meal in day.meals]


@dataclass(frozen=True)
class TimingInfo:
    """Formatted durations of the optimization steps."""

    total_duration: str
    data_collection_time: str
    food_fetching_time: str
    serving_optimization_time: str
    response_build_time: str


@dataclass(frozen=True)
class DayResult:
    """Optimized meals for one day."""

    date: str
    meals: list[MealResult]


@dataclass(frozen=True)
class PlanResult:
    """Optimized meal plan with step timings."""

    days: dict[str, DayResult]
    message: str = ""
    timing: TimingInfo | None = None
    unresolved_foods: list[str] = field(default_factory=list)
    recipe: RecipeGuide = field(default_factory=RecipeGuide)


@dataclass(frozen=True)
class OriginalMeal:
    """Identity and target of a meal that is being regenerated."""

    meal_name: str
    macro_target: MacroTarget
    meal_time: str = ""
    meridiem: str = ""


@dataclass(frozen=True)
class MealRegeneration:
    """A replacement meal proposed for an existing meal slot.

    The replacement's own macro target drives portioning, while the result
    keeps the original meal's name, time and target.
    """

    meal: PlannedMeal
    original: OriginalMeal
    message: str = ""


@dataclass(frozen=True)
class RegenerationResult:
    """Optimized replacement meal with step timings."""

    meal: MealResult
    message: str = ""
    timing: TimingInfo | None = None
    unresolved_foods: list[str] = field(default_factory=list)
