"""Profile and goals endpoints."""

from fastapi import APIRouter, Request

from snacktrack.api.auth import get_container
from snacktrack.api.models import GoalsUpdate, ProfileUpdate

router = APIRouter(tags=["profile"])


@router.get("/profile")
async def read_profile(request: Request) -> dict[str, object]:
    """Return the profile, creating the default one on first use."""
    return {"profile": get_container(request).profile_service.get_profile()}


@router.patch("/profile")
async def update_profile(payload: ProfileUpdate, request: Request) -> dict[str, object]:
    """Apply a partial profile update."""
    container = get_container(request)
    profile = container.profile_service.update_profile(payload.changes())
    return {"profile": profile}


@router.post("/profile/onboarding/complete")
async def complete_onboarding(request: Request) -> dict[str, object]:
    """Finish onboarding and store goals calculated from the profile."""
    profile, goals = get_container(request).profile_service.complete_onboarding()
    return {"profile": profile, "goals": goals}


@router.post("/profile/reset")
async def reset_profile(request: Request) -> dict[str, object]:
    """Restore default profile values."""
    return {"profile": get_container(request).profile_service.reset_profile()}


@router.get("/profile/goals/preview")
async def preview_goals(request: Request) -> dict[str, object]:
    """Return calculated goals without storing them."""
    return {"goals": get_container(request).profile_service.preview_goals()}


@router.get("/goals")
async def read_goals(request: Request) -> dict[str, object]:
    """Return the stored daily goals."""
    return {"goals": get_container(request).goals_service.get_goals()}


@router.put("/goals")
async def update_goals(payload: GoalsUpdate, request: Request) -> dict[str, object]:
    """Override daily goals manually."""
    goals = get_container(request).goals_service.update_goals(payload.to_goals())
    return {"goals": goals}


@router.post("/goals/recalculate")
async def recalculate_goals(request: Request) -> dict[str, object]:
    """Replace daily goals with values calculated from the profile."""
    return {"goals": get_container(request).profile_service.recalculate_goals()}
