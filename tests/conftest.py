"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.meals import MealChanges, MealRecord, NewMeal
from calorie_tracker.domain.models import UserProfile
from calorie_tracker.services.history import HistoryService
from calorie_tracker.services.meals import MealRepository, MealService
from calorie_tracker.services.recognition import ClassifierClient, RecognitionService
from calorie_tracker.services.users import (
    IdentityProvider,
    UserRepository,
    UserService,
)

ALICE_TOKEN = "alice-token"
BOB_TOKEN = "bob-token"
ALICE_ID = UUID("11111111-1111-1111-1111-111111111111")
BOB_ID = UUID("22222222-2222-2222-2222-222222222222")


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def create_profile(
        self, user_id: UUID, daily_calorie_goal: int, timezone: str
    ) -> UserProfile:
        profile = UserProfile(
            id=user_id, daily_calorie_goal=daily_calorie_goal, timezone=timezone
        )
        self.profiles[user_id] = profile
        return profile

    def update_goal(self, user_id: UUID, daily_calorie_goal: int) -> None:
        self.profiles[user_id] = replace(
            self.profiles[user_id], daily_calorie_goal=daily_calorie_goal
        )

    def update_timezone(self, user_id: UUID, timezone: str) -> None:
        self.profiles[user_id] = replace(self.profiles[user_id], timezone=timezone)


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Identity provider resolving a fixed set of tokens."""

    tokens: dict[str, UUID] = field(
        default_factory=lambda: {ALICE_TOKEN: ALICE_ID, BOB_TOKEN: BOB_ID}
    )

    def authenticate(self, token: str) -> UUID | None:
        return self.tokens.get(token)


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealRecord] = field(default_factory=dict)

    def create_meal(self, meal: NewMeal) -> MealRecord:
        record = MealRecord(
            id=uuid4(),
            user_id=meal.user_id,
            name=meal.name,
            calorie_count=meal.calorie_count,
            detection_method=meal.detection_method,
            confidence=meal.confidence,
            timestamp=meal.timestamp,
            notes=meal.notes,
        )
        self.meals[record.id] = record
        return record

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        return self.meals.get(meal_id)

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        selected = [
            meal
            for meal in self.meals.values()
            if meal.user_id == user_id and start <= meal.timestamp <= end
        ]
        return sorted(selected, key=lambda meal: meal.timestamp, reverse=True)

    def update_meal(self, meal_id: UUID, changes: MealChanges) -> MealRecord | None:
        current = self.meals.get(meal_id)
        if current is None:
            return None
        updated = replace(
            current,
            name=changes.name if changes.name is not None else current.name,
            calorie_count=(
                changes.calorie_count
                if changes.calorie_count is not None
                else current.calorie_count
            ),
            notes=changes.notes if changes.notes is not None else current.notes,
        )
        self.meals[meal_id] = updated
        return updated

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)


@dataclass
class FakeClassifierClient(ClassifierClient):
    """Classifier returning a fixed payload, or raising when given an error."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "label": "Margherita Pizza Slice",
            "confidence_percent": 87,
        }
    )
    error: Exception | None = None
    calls: int = 0

    async def classify(self, image_bytes: bytes) -> dict[str, object]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service.key.signature",
        openai_api_key="openai-key",
        huggingface_api_key="hf-key",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def classifier() -> FakeClassifierClient:
    return FakeClassifierClient()


@pytest.fixture
def alice() -> UserProfile:
    return UserProfile(id=ALICE_ID, daily_calorie_goal=2000, timezone="UTC")


@pytest.fixture
def bob() -> UserProfile:
    return UserProfile(id=BOB_ID, daily_calorie_goal=2000, timezone="UTC")


@pytest.fixture
def meal_service(
    meal_repository: InMemoryMealRepository, classifier: FakeClassifierClient
) -> MealService:
    return MealService(
        repository=meal_repository,
        recognition_service=RecognitionService(classifier),
    )


@pytest.fixture
def history_service(meal_repository: InMemoryMealRepository) -> HistoryService:
    return HistoryService(meal_repository)


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    meal_repository: InMemoryMealRepository,
    classifier: FakeClassifierClient,
) -> AppContainer:
    recognition_service = RecognitionService(classifier)
    user_service = UserService(
        repository=user_repository,
        identity_provider=FakeIdentityProvider(),
        default_daily_goal=settings.default_daily_goal,
        default_timezone=settings.default_timezone,
    )
    meal_service = MealService(
        repository=meal_repository,
        recognition_service=recognition_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=user_service,
        meal_service=meal_service,
        history_service=HistoryService(meal_repository),
        recognition_service=recognition_service,
        close_resources=close_resources,
    )


def auth_headers(token: str = ALICE_TOKEN) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
