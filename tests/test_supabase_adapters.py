"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from calorie_tracker.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from calorie_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from calorie_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_tracker.domain.meals import DetectionMethod, MealChanges, NewMeal


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


@dataclass
class FakeAuthUser:
    id: str


@dataclass
class FakeAuthResponse:
    user: FakeAuthUser | None


@dataclass
class FakeAuth:
    users: dict[str, str] = field(default_factory=dict)

    def get_user(self, token: str) -> FakeAuthResponse:
        if token not in self.users:
            raise RuntimeError("invalid JWT")
        return FakeAuthResponse(user=FakeAuthUser(id=self.users[token]))


@dataclass
class FakeAuthClient:
    auth: FakeAuth


def _meal_row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "user_id": str(uuid4()),
        "name": "Pizza",
        "calorie_count": 285,
        "detection_method": "ai_image",
        "confidence": 87,
        "eaten_at": "2024-03-05T12:00:00+00:00",
        "notes": None,
    }
    row.update(overrides)
    return row


def test_meal_repository_create() -> None:
    client = FakeSupabaseClient()
    meals_table = client.table("meals")
    meals_table.queue("insert", [_meal_row()])
    user_id = uuid4()

    repository = SupabaseMealRepository(client)
    created = repository.create_meal(
        NewMeal(
            user_id=user_id,
            name="Pizza",
            calorie_count=285,
            detection_method=DetectionMethod.AI_IMAGE,
            confidence=87,
            timestamp=datetime(2024, 3, 5, 12, tzinfo=UTC),
        )
    )

    assert isinstance(meals_table.last_payload, dict)
    assert meals_table.last_payload["user_id"] == str(user_id)
    assert meals_table.last_payload["detection_method"] == "ai_image"
    assert meals_table.last_payload["eaten_at"] == "2024-03-05T12:00:00+00:00"
    assert created.is_ai_detected
    assert created.notes == ""
    assert created.timestamp == datetime(2024, 3, 5, 12, tzinfo=UTC)


def test_meal_repository_get_missing() -> None:
    client = FakeSupabaseClient()

    assert SupabaseMealRepository(client).get_meal(uuid4()) is None


def test_meal_repository_list_filters_inclusive_range() -> None:
    client = FakeSupabaseClient()
    meals_table = client.table("meals")
    meals_table.queue(
        "select",
        [
            _meal_row(eaten_at="2024-03-05T19:00:00"),
            _meal_row(eaten_at="2024-03-05T08:00:00+00:00", detection_method=None),
        ],
    )
    user_id = uuid4()
    start = datetime(2024, 3, 1, tzinfo=UTC)
    end = datetime(2024, 3, 7, tzinfo=UTC)

    meals = SupabaseMealRepository(client).list_meals(user_id, start, end)

    assert ("eq", "user_id", str(user_id)) in meals_table.last_filters
    assert ("gte", "eaten_at", start.isoformat()) in meals_table.last_filters
    assert ("lte", "eaten_at", end.isoformat()) in meals_table.last_filters
    assert meals[0].timestamp.tzinfo is UTC
    assert meals[1].detection_method is DetectionMethod.MANUAL


def test_meal_repository_update_sends_changed_columns() -> None:
    client = FakeSupabaseClient()
    meals_table = client.table("meals")
    meals_table.queue("update", [_meal_row(name="Calzone")])

    updated = SupabaseMealRepository(client).update_meal(
        uuid4(), MealChanges(name="Calzone")
    )

    assert meals_table.last_payload == {"name": "Calzone"}
    assert updated is not None
    assert updated.name == "Calzone"


def test_meal_repository_delete() -> None:
    client = FakeSupabaseClient()
    meals_table = client.table("meals")
    meal_id = uuid4()

    SupabaseMealRepository(client).delete_meal(meal_id)

    assert meals_table.actions == ["delete"]
    assert meals_table.last_filters == [("eq", "id", str(meal_id))]


def test_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("user_profiles")
    user_id = str(uuid4())
    row = {"user_id": user_id, "daily_calorie_goal": 2000, "timezone": "UTC"}
    profiles_table.queue("insert", [row])
    profiles_table.queue("select", [{**row, "daily_calorie_goal": 1800}])

    repository = SupabaseUserRepository(client)
    created = repository.create_profile(UUID(user_id), 2000, "UTC")
    fetched = repository.get_profile(UUID(user_id))

    assert str(created.id) == user_id
    assert fetched is not None
    assert fetched.daily_calorie_goal == 1800


def test_user_repository_updates() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("user_profiles")
    repository = SupabaseUserRepository(client)

    repository.update_goal(uuid4(), 2200)
    assert isinstance(profiles_table.last_payload, dict)
    assert profiles_table.last_payload["daily_calorie_goal"] == 2200

    repository.update_timezone(uuid4(), "Asia/Jerusalem")
    assert profiles_table.last_payload["timezone"] == "Asia/Jerusalem"
    assert "updated_at" in profiles_table.last_payload


def test_identity_provider_resolves_token() -> None:
    user_id = uuid4()
    provider = SupabaseIdentityProvider(
        FakeAuthClient(auth=FakeAuth(users={"good": str(user_id)}))
    )

    assert provider.authenticate("good") == user_id
    assert provider.authenticate("bad") is None
