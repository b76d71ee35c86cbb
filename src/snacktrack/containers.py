"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from snacktrack.adapters.openai_analysis_client import OpenAIAnalysisClient
from snacktrack.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from snacktrack.adapters.supabase_favourites_repository import (
    SupabaseFavouritesRepository,
)
from snacktrack.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from snacktrack.adapters.supabase_profile_repository import (
    SupabaseGoalsRepository,
    SupabaseProfileRepository,
)
from snacktrack.config import Settings
from snacktrack.services.analysis import AnalysisService
from snacktrack.services.barcode import BarcodeService
from snacktrack.services.cache import InMemoryCache
from snacktrack.services.clock import LocalCalendarClock, ZoneInfoCalendarClock
from snacktrack.services.favourites import FavouritesService
from snacktrack.services.food_log import FoodLogService
from snacktrack.services.goals import GoalsService
from snacktrack.services.profile import ProfileService
from snacktrack.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: LocalCalendarClock
    profile_service: ProfileService
    goals_service: GoalsService
    food_log_service: FoodLogService
    favourites_service: FavouritesService
    stats_service: StatsService
    analysis_service: AnalysisService
    barcode_service: BarcodeService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = ZoneInfoCalendarClock(resolved_settings.timezone)
    food_log_repository = SupabaseFoodLogRepository(supabase_client)

    goals_service = GoalsService(SupabaseGoalsRepository(supabase_client))
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        goals_service=goals_service,
        clock=clock,
    )
    food_log_service = FoodLogService(repository=food_log_repository, clock=clock)
    favourites_service = FavouritesService(
        repository=SupabaseFavouritesRepository(supabase_client),
        food_log_service=food_log_service,
    )
    stats_service = StatsService(repository=food_log_repository, clock=clock)

    openai_client = OpenAIAnalysisClient.create(resolved_settings.openai_api_key)
    analysis_service = AnalysisService(
        client=openai_client,
        text_model=resolved_settings.openai_text_model,
        photo_model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )
    openfoodfacts_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.openfoodfacts_base_url,
        user_agent=resolved_settings.openfoodfacts_user_agent,
    )
    barcode_service = BarcodeService(
        client=openfoodfacts_client,
        cache=InMemoryCache(),
    )

    async def close_resources() -> None:
        await openfoodfacts_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        profile_service=profile_service,
        goals_service=goals_service,
        food_log_service=food_log_service,
        favourites_service=favourites_service,
        stats_service=stats_service,
        analysis_service=analysis_service,
        barcode_service=barcode_service,
        close_resources=close_resources,
    )
