"""Tests for food recognition and calorie estimation."""

import asyncio

import pytest

from calorie_tracker.services.recognition import (
    DEFAULT_CALORIES,
    FALLBACK_ANALYSIS,
    RecognitionService,
    estimate_calories,
)
from tests.conftest import FakeClassifierClient


@pytest.mark.parametrize(
    ("label", "calories"),
    [
        ("Margherita Pizza Slice", 285),
        ("Grilled Chicken", 165),
        ("orange juice", 62),
        ("Chocolate ice cream", 207),
        ("ramen bowl", DEFAULT_CALORIES),
    ],
)
def test_estimate_calories(label: str, calories: int) -> None:
    assert estimate_calories(label) == calories


def test_identify_returns_label_and_estimate() -> None:
    client = FakeClassifierClient(
        payload={"label": "Caesar salad", "confidence_percent": 64}
    )
    service = RecognitionService(client)

    analysis = asyncio.run(service.identify(b"image"))

    assert analysis.food_name == "Caesar salad"
    assert analysis.calories == 150
    assert analysis.confidence == 64


def test_identify_falls_back_on_client_error() -> None:
    client = FakeClassifierClient(error=RuntimeError("boom"))
    service = RecognitionService(client)

    analysis = asyncio.run(service.identify(b"image"))

    assert analysis == FALLBACK_ANALYSIS
    assert client.calls == 1


@pytest.mark.parametrize(
    "payload",
    [
        {"label": "pizza", "confidence_percent": 150},
        {"confidence_percent": 50},
        {"label": "pizza"},
    ],
)
def test_identify_falls_back_on_malformed_result(payload: dict[str, object]) -> None:
    service = RecognitionService(FakeClassifierClient(payload=payload))

    analysis = asyncio.run(service.identify(b"image"))

    assert analysis == FALLBACK_ANALYSIS
