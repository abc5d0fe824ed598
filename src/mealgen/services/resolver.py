"""Concurrent resolution of food names to nutrition candidates."""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from mealgen.domain.nutrition import FoodCandidate
from mealgen.domain.plans import PlannedMeal
from mealgen.services.lookup import NutritionLookup

_logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 10


@dataclass
class ConcurrentFoodResolver:
    """Looks up each unique food name once with bounded concurrency.

    Every name passed to ``resolve`` gets an entry in the returned mapping:
    the lookup's candidate, or None when the lookup failed, matched nothing,
    or was still running when the optional batch deadline expired. A single
    food's failure never fails the batch.
    """

    lookup: NutritionLookup
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    batch_timeout_seconds: float | None = None

    async def resolve(self, names: Iterable[str]) -> dict[str, FoodCandidate | None]:
        """Resolve every unique name and wait for all lookups to finish."""
        unique_names = list(dict.fromkeys(names))
        if not unique_names:
            return {}

        semaphore = asyncio.Semaphore(max(1, self.max_concurrency))
        tasks = {
            name: asyncio.create_task(self._resolve_one(name, semaphore))
            for name in unique_names
        }
        done, pending = await asyncio.wait(
            tasks.values(), timeout=self.batch_timeout_seconds
        )
        if pending:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            _logger.warning(
                "Food fetching deadline of %ss hit, %s lookups cancelled",
                self.batch_timeout_seconds,
                len(pending),
            )

        results: dict[str, FoodCandidate | None] = {
            name: task.result() if task in done else None
            for name, task in tasks.items()
        }
        _logger.info(
            "Food fetching: %s API calls, %s resolved",
            len(unique_names),
            sum(1 for candidate in results.values() if candidate is not None),
        )
        return results

    async def _resolve_one(
        self, name: str, semaphore: asyncio.Semaphore
    ) -> FoodCandidate | None:
        async with semaphore:
            try:
                candidate = await self.lookup.search(name)
            except Exception as exc:
                _logger.warning("Food lookup failed for %r: %s", name, exc)
                return None
        if candidate is None:
            _logger.info("Food lookup returned no match for %r", name)
        return candidate


def collect_food_names(meals: Iterable[PlannedMeal]) -> list[str]:
    """Return the unique requested food names across meals, in first-seen order."""
    return list(dict.fromkeys(food.name for meal in meals for food in meal.foods))
