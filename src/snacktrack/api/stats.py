"""Statistics endpoints."""

from datetime import date

from fastapi import APIRouter, HTTPException, Query, Request, status

from snacktrack.api.auth import get_container
from snacktrack.domain.stats import StatsPeriod

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/daily-totals")
async def daily_totals(
    request: Request,
    start: date = Query(),
    end: date = Query(),
) -> dict[str, object]:
    """Return calories per local day for an inclusive date range."""
    if start > end:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="start must not be after end",
        )
    samples = get_container(request).stats_service.get_daily_samples(
        start.isoformat(), end.isoformat()
    )
    return {"days": samples}


@router.get("/{period}")
async def period_stats(period: StatsPeriod, request: Request) -> dict[str, object]:
    """Return the chart series, streaks and compliance for a period."""
    container = get_container(request)
    profile = container.profile_service.get_profile()
    stats = container.stats_service.get_stats(
        period, container.goals_service.get_goals(), profile.weight_goal
    )
    return {"stats": stats}
