"""Dependency container wiring for the optimizer."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from mealgen.adapters.food_search_client import HttpxFoodSearchClient
from mealgen.app_logging import configure_logging
from mealgen.config import Settings
from mealgen.services.lookup import FoodLookupService
from mealgen.services.optimizer import MealOptimizer
from mealgen.services.rebalance import MacroRebalancer
from mealgen.services.resolver import ConcurrentFoodResolver


@dataclass
class AppContainer:
    """Holds optimizer-wide dependencies."""

    settings: Settings
    lookup_service: FoodLookupService
    resolver: ConcurrentFoodResolver
    optimizer: MealOptimizer
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    food_search_client = HttpxFoodSearchClient.create(
        api_key=resolved_settings.food_api_key,
        base_url=resolved_settings.food_api_base_url,
        timeout_seconds=resolved_settings.food_api_timeout_seconds,
        max_results=resolved_settings.food_api_max_results,
    )
    lookup_service = FoodLookupService(
        client=food_search_client, debug=resolved_settings.food_lookup_debug
    )
    resolver = ConcurrentFoodResolver(
        lookup=lookup_service,
        max_concurrency=resolved_settings.lookup_concurrency,
        batch_timeout_seconds=resolved_settings.lookup_batch_timeout_seconds,
    )
    optimizer = MealOptimizer(
        resolver=resolver,
        rebalancer=MacroRebalancer(
            max_passes=resolved_settings.rebalance_passes,
            tolerance=resolved_settings.rebalance_tolerance,
        ),
    )

    async def close_resources() -> None:
        await food_search_client.close()

    return AppContainer(
        settings=resolved_settings,
        lookup_service=lookup_service,
        resolver=resolver,
        optimizer=optimizer,
        close_resources=close_resources,
    )
