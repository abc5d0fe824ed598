"""Canonical serving selection."""

from collections.abc import Sequence
from dataclasses import replace

from mealgen.domain.nutrition import NutrientVector, Serving

GRAM_UNITS = frozenset({"g", "gram", "grams"})

DEFAULT_SERVING = Serving(
    serving_id="default",
    serving_description="1 serving",
    measurement_description="g",
    metric_serving_amount=1.0,
    metric_serving_unit="g",
    number_of_units=1.0,
    nutrients=NutrientVector().filled(),
)


def is_gram_serving(serving: Serving) -> bool:
    """Return True when the serving is measured in grams."""
    return serving.measurement_description.strip().lower() in GRAM_UNITS


def select_canonical_serving(servings: Sequence[Serving]) -> Serving:
    """Pick one gram-preferred serving and fill every missing field.

    The first gram serving wins; without one, the first serving of any unit
    is used. A selection missing its id or calories is never swapped for a
    later serving: its gaps are filled with defaults instead.
    """
    if not servings:
        return DEFAULT_SERVING
    gram_servings = [serving for serving in servings if is_gram_serving(serving)]
    candidates = gram_servings or [servings[0]]
    return _with_defaults(candidates[0])


def _with_defaults(serving: Serving) -> Serving:
    return replace(
        serving,
        serving_id=serving.serving_id or DEFAULT_SERVING.serving_id,
        serving_description=(
            serving.serving_description or DEFAULT_SERVING.serving_description
        ),
        measurement_description=(
            serving.measurement_description or DEFAULT_SERVING.measurement_description
        ),
        metric_serving_amount=(
            serving.metric_serving_amount
            if serving.metric_serving_amount is not None
            else DEFAULT_SERVING.metric_serving_amount
        ),
        metric_serving_unit=(
            serving.metric_serving_unit or DEFAULT_SERVING.metric_serving_unit
        ),
        number_of_units=(
            serving.number_of_units
            if serving.number_of_units is not None
            else DEFAULT_SERVING.number_of_units
        ),
        nutrients=serving.nutrients.filled(),
    )
