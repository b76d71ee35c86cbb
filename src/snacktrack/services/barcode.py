"""Barcode lookup service backed by OpenFoodFacts."""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from snacktrack.adapters.openfoodfacts_client import OpenFoodFactsClient
from snacktrack.domain.barcode import BarcodeProduct
from snacktrack.domain.errors import InvalidBarcodeError
from snacktrack.services.cache import Cache
from snacktrack.services.goals import round_half_up

MIN_BARCODE_LENGTH = 8
_FOUND_STATUS = 1
_WHITESPACE = re.compile(r"\s")

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class BarcodeService:
    """Service for product lookups with caching."""

    client: OpenFoodFactsClient
    cache: Cache
    product_ttl_seconds: int = 86400
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def lookup(self, barcode: str) -> BarcodeProduct | None:
        """Return the product for an EAN/UPC barcode, or None if unknown."""
        cleaned = _WHITESPACE.sub("", barcode)
        if len(cleaned) < MIN_BARCODE_LENGTH:
            raise InvalidBarcodeError(barcode)

        cache_key = f"off:product:{cleaned}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, BarcodeProduct):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.get_product(cleaned), action=f"product:{cleaned}"
        )
        product_data = payload.get("product")
        if payload.get("status") != _FOUND_STATUS or not isinstance(
            product_data, dict
        ):
            _logger.info("Barcode not found: %s", cleaned)
            return None

        product = _parse_product(product_data, cleaned)
        self.cache.set(cache_key, product, ttl_seconds=self.product_ttl_seconds)
        return product

    async def search(self, query: str, limit: int = 10) -> list[BarcodeProduct]:
        """Search products by name."""
        cleaned = query.strip()
        cache_key = f"off:search:{cleaned.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.search_products(cleaned, page_size=limit),
            action="search",
        )
        products = [
            _parse_product(item, str(item.get("code", "")))
            for item in payload.get("products") or []
            if isinstance(item, dict) and item.get("product_name")
        ]
        self.cache.set(cache_key, products, ttl_seconds=self.search_ttl_seconds)
        return products

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "OpenFoodFacts %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _parse_product(product: dict[str, object], barcode: str) -> BarcodeProduct:
    """Prefer per-serving nutriments, falling back to per-100g values."""
    nutriments = product.get("nutriments") or {}
    has_serving = "energy-kcal_serving" in nutriments
    suffix = "serving" if has_serving else "100g"

    def nutrient(name: str) -> int:
        value = nutriments.get(f"{name}_{suffix}")
        return round_half_up(float(value)) if value else 0

    return BarcodeProduct(
        barcode=barcode,
        name=str(
            product.get("product_name_en")
            or product.get("product_name")
            or "Unknown Product"
        ),
        brand=product.get("brands") or None,
        calories=nutrient("energy-kcal"),
        protein=nutrient("proteins"),
        carbs=nutrient("carbohydrates"),
        fat=nutrient("fat"),
        serving_size=product.get("serving_size") if has_serving else "100g",
        image_url=product.get("image_front_url") or product.get("image_url"),
    )
