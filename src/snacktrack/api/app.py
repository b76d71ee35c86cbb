"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from snacktrack.api.auth import require_api_token
from snacktrack.api.lookup import router as lookup_router
from snacktrack.api.meals import router as meals_router
from snacktrack.api.profile import router as profile_router
from snacktrack.api.stats import router as stats_router
from snacktrack.app_logging import configure_logging
from snacktrack.containers import AppContainer
from snacktrack.domain.errors import (
    FavouriteNotFoundError,
    FoodLogNotFoundError,
    InvalidBarcodeError,
    NoFoodDetectedError,
    NotFoodError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting with timezone %s", container.settings.timezone)
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="SnackTrack", lifespan=lifespan)
    app.state.container = container

    protected = [Depends(require_api_token)]
    for router in (profile_router, meals_router, stats_router, lookup_router):
        app.include_router(router, dependencies=protected)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(FoodLogNotFoundError)
    @app.exception_handler(FavouriteNotFoundError)
    async def not_found(request: Request, exc: LookupError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": f"Not found: {exc}"},
        )

    @app.exception_handler(NotFoodError)
    async def not_food(request: Request, exc: NotFoodError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": "Input was not related to food/nutrition."},
        )

    @app.exception_handler(NoFoodDetectedError)
    async def no_food(request: Request, exc: NoFoodDetectedError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": "No food items detected"},
        )

    @app.exception_handler(InvalidBarcodeError)
    async def invalid_barcode(
        request: Request, exc: InvalidBarcodeError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": "Invalid barcode format"},
        )

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error", extra={"path": request.url.path}, exc_info=exc
        )
        detail = "Internal server error"
        if container.settings.environment == "local":
            detail = f"{detail} (debug: {type(exc).__name__}: {exc})"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": detail},
        )

    return app
