"""Food log and favourites endpoints."""

from datetime import date

from fastapi import APIRouter, Query, Request, status

from snacktrack.api.auth import get_container
from snacktrack.api.models import FavouriteLogRequest, FoodIn

router = APIRouter(tags=["meals"])


def _date_key(request: Request, day: date | None) -> str:
    return day.isoformat() if day else get_container(request).clock.today()


@router.get("/meals")
async def list_meals(
    request: Request, day: date | None = Query(default=None, alias="date")
) -> dict[str, object]:
    """Return the food logged on a day (today by default)."""
    date_key = _date_key(request, day)
    meals = get_container(request).food_log_service.list_day(date_key)
    return {"date": date_key, "meals": meals}


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def add_meal(payload: FoodIn, request: Request) -> dict[str, object]:
    """Log a food item."""
    record = get_container(request).food_log_service.add_food(
        payload.to_draft(), timestamp_ms=payload.timestamp
    )
    return {"meal": record}


@router.delete("/meals")
async def clear_meals(
    request: Request, day: date | None = Query(default=None, alias="date")
) -> dict[str, object]:
    """Delete every item logged on a day (today by default)."""
    date_key = _date_key(request, day)
    deleted = get_container(request).food_log_service.clear_day(date_key)
    return {"date": date_key, "deleted": deleted}


@router.get("/meals/history")
async def meal_history(
    request: Request, limit: int = Query(default=50, ge=1, le=500)
) -> dict[str, object]:
    """Return the most recent items across all days."""
    return {"meals": get_container(request).food_log_service.history(limit)}


@router.put("/meals/{meal_id}")
async def update_meal(
    meal_id: str, payload: FoodIn, request: Request
) -> dict[str, object]:
    """Edit a logged item."""
    record = get_container(request).food_log_service.update_food(
        meal_id, payload.to_draft()
    )
    return {"meal": record}


@router.delete("/meals/{meal_id}")
async def delete_meal(meal_id: str, request: Request) -> dict[str, str]:
    """Delete a logged item."""
    get_container(request).food_log_service.delete_food(meal_id)
    return {"status": "ok"}


@router.get("/summary/today")
async def today_summary(request: Request) -> dict[str, object]:
    """Return today's items, totals and remaining goals."""
    container = get_container(request)
    summary = container.food_log_service.get_day_summary(
        container.clock.today(), container.goals_service.get_goals()
    )
    return {"summary": summary}


@router.get("/favourites")
async def list_favourites(
    request: Request, limit: int = Query(default=20, ge=1, le=100)
) -> dict[str, object]:
    """Return saved favourites."""
    return {
        "favourites": get_container(request).favourites_service.list_favourites(limit)
    }


@router.post("/favourites", status_code=status.HTTP_201_CREATED)
async def add_favourite(payload: FoodIn, request: Request) -> dict[str, object]:
    """Save a food as a favourite."""
    favourite = get_container(request).favourites_service.add_favourite(
        payload.to_draft()
    )
    return {"favourite": favourite}


@router.delete("/favourites/{favourite_id}")
async def delete_favourite(favourite_id: str, request: Request) -> dict[str, str]:
    """Remove a favourite."""
    get_container(request).favourites_service.delete_favourite(favourite_id)
    return {"status": "ok"}


@router.post("/favourites/{favourite_id}/log", status_code=status.HTTP_201_CREATED)
async def log_favourite(
    favourite_id: str, payload: FavouriteLogRequest, request: Request
) -> dict[str, object]:
    """Log a favourite as a new food entry."""
    record = get_container(request).favourites_service.log_favourite(
        favourite_id, payload.meal_type, timestamp_ms=payload.timestamp
    )
    return {"meal": record}
