"""OpenFoodFacts API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class OpenFoodFactsClient(Protocol):
    """Interface for OpenFoodFacts API interactions."""

    async def get_product(self, barcode: str) -> dict[str, object]:
        """Fetch a product by barcode and return raw API data."""

    async def search_products(
        self, query: str, page_size: int = 10
    ) -> dict[str, object]:
        """Search products by name and return raw API data."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed OpenFoodFacts client."""

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, user_agent: str) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url, user_agent=user_agent, http_client=httpx.AsyncClient()
        )

    async def get_product(self, barcode: str) -> dict[str, object]:
        """Fetch a product by barcode."""
        response = await self.http_client.get(
            f"{self.base_url}/product/{barcode}.json",
            headers={"User-Agent": self.user_agent},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def search_products(
        self, query: str, page_size: int = 10
    ) -> dict[str, object]:
        """Search products by name."""
        response = await self.http_client.get(
            f"{self.base_url}/search",
            params={"search_terms": query, "page_size": page_size, "json": "true"},
            headers={"User-Agent": self.user_agent},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
