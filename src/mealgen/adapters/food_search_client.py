"""Food search API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class FoodSearchClient(Protocol):
    """Interface for food search API interactions."""

    async def search_food(self, food_name: str) -> dict[str, object]:
        """Search foods by name and return the raw result data."""

    async def search_barcode(
        self, barcode: str, page_number: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        """Search foods by barcode and return the raw result data."""


@dataclass
class HttpxFoodSearchClient(FoodSearchClient):
    """HTTPX-backed food search client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30.0
    max_results: int = 20

    @classmethod
    def create(
        cls,
        api_key: str,
        base_url: str,
        timeout_seconds: float = 30.0,
        max_results: int = 20,
    ) -> "HttpxFoodSearchClient":
        """Create a food search client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
            max_results=max_results,
        )

    async def search_food(self, food_name: str) -> dict[str, object]:
        """Search foods by name, first page only."""
        return await self._get(
            {
                "food_name": food_name,
                "page_number": "0",
                "max_results": str(self.max_results),
            }
        )

    async def search_barcode(
        self, barcode: str, page_number: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        """Search foods by barcode."""
        return await self._get(
            {
                "barcode": barcode,
                "page_number": str(page_number),
                "max_results": str(max_results),
            }
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, params: dict[str, str]) -> dict[str, object]:
        response = await self.http_client.get(
            self.base_url,
            params=params,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        payload = response.json()
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise RuntimeError("Food search returned no data envelope")
        return data
