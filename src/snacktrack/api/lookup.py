"""AI estimation and barcode lookup endpoints."""

import base64
import binascii

from fastapi import APIRouter, HTTPException, Query, Request, status

from snacktrack.api.auth import get_container
from snacktrack.api.models import PhotoAnalysisRequest, TextAnalysisRequest

router = APIRouter(tags=["lookup"])


@router.post("/analysis/text")
async def analyze_text(
    payload: TextAnalysisRequest, request: Request
) -> dict[str, object]:
    """Estimate nutrition for a food description."""
    estimate = await get_container(request).analysis_service.estimate_text(
        payload.description
    )
    return {"food": estimate}


@router.post("/analysis/photo")
async def analyze_photo(
    payload: PhotoAnalysisRequest, request: Request
) -> dict[str, object]:
    """Identify foods in a photo and estimate each one."""
    try:
        image_bytes = base64.b64decode(payload.image_base64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="image_base64 is not valid base64",
        ) from exc
    foods = await get_container(request).analysis_service.analyze_photo(image_bytes)
    return {"foods": foods}


@router.get("/barcode/search")
async def search_products(
    request: Request,
    q: str = Query(min_length=1),
    limit: int = Query(default=10, ge=1, le=50),
) -> dict[str, object]:
    """Search packaged products by name."""
    products = await get_container(request).barcode_service.search(q, limit)
    return {"products": products}


@router.get("/barcode/{code}")
async def lookup_barcode(code: str, request: Request) -> dict[str, object]:
    """Return nutrition for a scanned barcode."""
    product = await get_container(request).barcode_service.lookup(code)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found in database",
        )
    return {"product": product}
