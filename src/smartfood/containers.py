"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from smartfood.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from smartfood.adapters.supabase_food_repository import SupabaseFoodRepository
from smartfood.config import Settings
from smartfood.services.pantry import PantryService
from smartfood.services.scans import ScanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    scan_service: ScanService
    pantry_service: PantryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(
        supabase_client, table_name=resolved_settings.supabase_foods_table
    )
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        timeout_seconds=resolved_settings.off_timeout_seconds,
        user_agent=resolved_settings.off_user_agent,
    )
    scan_service = ScanService(
        client=off_client,
        fallback_serving_grams=resolved_settings.fallback_serving_grams,
    )
    pantry_service = PantryService(food_repository)

    async def close_resources() -> None:
        await off_client.close()

    return AppContainer(
        settings=resolved_settings,
        scan_service=scan_service,
        pantry_service=pantry_service,
        close_resources=close_resources,
    )
