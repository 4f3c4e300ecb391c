"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.huggingface_classifier_client import (
    HttpxHuggingFaceClassifierClient,
)
from calorie_tracker.adapters.openai_classifier_client import OpenAIClassifierClient
from calorie_tracker.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from calorie_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from calorie_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_tracker.config import Settings
from calorie_tracker.services.history import HistoryService
from calorie_tracker.services.meals import MealService
from calorie_tracker.services.recognition import RecognitionService
from calorie_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    meal_service: MealService
    history_service: HistoryService
    recognition_service: RecognitionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    user_service = UserService(
        repository=SupabaseUserRepository(supabase_client),
        identity_provider=SupabaseIdentityProvider(supabase_client),
        default_daily_goal=resolved_settings.default_daily_goal,
        default_timezone=resolved_settings.default_timezone,
    )
    classifier: OpenAIClassifierClient | HttpxHuggingFaceClassifierClient
    if resolved_settings.classifier_backend == "huggingface":
        classifier = HttpxHuggingFaceClassifierClient.create(
            api_key=resolved_settings.huggingface_api_key,
            model_url=resolved_settings.huggingface_model_url,
        )
    else:
        classifier = OpenAIClassifierClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            store=resolved_settings.openai_store,
        )
    recognition_service = RecognitionService(classifier)
    meal_service = MealService(
        repository=meal_repository,
        recognition_service=recognition_service,
    )
    history_service = HistoryService(meal_repository)

    async def close_resources() -> None:
        await classifier.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        meal_service=meal_service,
        history_service=history_service,
        recognition_service=recognition_service,
        close_resources=close_resources,
    )
