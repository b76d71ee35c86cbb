"""Barcode product models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BarcodeProduct:
    """Packaged product nutrition from OpenFoodFacts."""

    barcode: str
    name: str
    brand: str | None
    calories: int
    protein: int
    carbs: int
    fat: int
    serving_size: str | None
    image_url: str | None
