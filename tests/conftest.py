"""
Shared pytest fixtures for the breed advisor test suite.

Provides:
  - ``make_breed`` / ``make_farmer_input``: factories with sensible defaults
    (a 40000 INR dairy breed and a milk-goal farmer in a hot, dry region).
  - ``small_catalog``: five hand-written breeds covering every tier.
  - ``bundled_catalog``: the catalog shipped with the package.
  - ``fake_narrator``: in-process stand-in for the text-generation model.
  - ``auth_headers``: a valid bearer token for the REST and websocket routes.
  - ``client``: a TestClient over the real app with the fake narrator installed.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from breed_advisor import main
from breed_advisor.core.config import settings
from breed_advisor.core.security import create_access_token
from breed_advisor.models.breed import AnimalType, BreedRecord, Tier
from breed_advisor.models.breed_recommendation import (
    BreedNarrative,
    BreedNarrativeResponse,
    FarmerInput,
    FarmingGoal,
)
from breed_advisor.services.breed_catalog import load_breed_catalog


class FakeNarrator:
    """Answers like the model would, one narrative per breed it was sent.

    Args:
        limit:  Return at most this many items (simulates a short answer).
        delay:  Seconds to sleep before answering (simulates a slow model).
        error:  Exception to raise instead of answering.
        output: Fixed output to return instead of generated narratives.
    """

    def __init__(
        self,
        limit: Optional[int] = None,
        delay: float = 0.0,
        error: Optional[Exception] = None,
        output: Any = ...,
    ) -> None:
        self.limit = limit
        self.delay = delay
        self.error = error
        self.output = output
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, input_data: dict[str, Any]):
        self.calls.append(input_data)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.output is not ...:
            return self.output

        breeds = input_data["breeds"]
        if self.limit is not None:
            breeds = breeds[: self.limit]
        return BreedNarrativeResponse(
            recommended_breeds=[
                BreedNarrative(
                    breed_name=f"{breed['breed_name']} ({input_data['language']})",
                    pros=f"Good for {input_data['goal']}",
                    cons="Needs regular vet visits",
                )
                for breed in breeds
            ]
        )


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch: pytest.MonkeyPatch) -> str:
    secret = "test-secret-key-for-breed-advisor-suite"
    monkeypatch.setattr(settings, "JWT_SECRET_KEY", secret)
    return secret


@pytest.fixture
def make_breed():
    def _make(**overrides: Any) -> BreedRecord:
        fields: dict[str, Any] = {
            "breed_name": "Test Breed",
            "animal_type": AnimalType.CATTLE,
            "market_price": 40000,
            "milk_yield": 10,
            "strength": Tier.MEDIUM,
            "maintenance_cost": Tier.LOW,
            "care_level": Tier.LOW,
            "climate_suitability": {"Hot and Dry"},
        }
        fields.update(overrides)
        return BreedRecord(**fields)

    return _make


@pytest.fixture
def make_farmer_input():
    def _make(**overrides: Any) -> FarmerInput:
        fields: dict[str, Any] = {
            "goal": FarmingGoal.MILK,
            "budget": 50000,
            "land_size": 2,
            "regional_climate": "Hot and Dry",
            "language": "en",
        }
        fields.update(overrides)
        return FarmerInput(**fields)

    return _make


@pytest.fixture
def small_catalog(make_breed) -> tuple[BreedRecord, ...]:
    return (
        make_breed(
            breed_name="Dairy Star",
            market_price=45000,
            milk_yield=14,
            strength=Tier.LOW,
            maintenance_cost=Tier.HIGH,
            care_level=Tier.HIGH,
        ),
        make_breed(
            breed_name="Desert Ox",
            market_price=35000,
            milk_yield=2,
            strength=Tier.HIGH,
            maintenance_cost=Tier.LOW,
            care_level=Tier.LOW,
        ),
        make_breed(
            breed_name="All Rounder",
            market_price=42000,
            milk_yield=8,
            strength=Tier.MEDIUM,
            maintenance_cost=Tier.MEDIUM,
            care_level=Tier.MEDIUM,
        ),
        make_breed(
            breed_name="Hardy Local",
            market_price=20000,
            milk_yield=4,
            strength=Tier.MEDIUM,
            maintenance_cost=Tier.LOW,
            care_level=Tier.LOW,
            climate_suitability={"Hot and Dry", "Moderate"},
        ),
        make_breed(
            breed_name="Hill Cow",
            market_price=30000,
            milk_yield=5,
            strength=Tier.HIGH,
            maintenance_cost=Tier.LOW,
            care_level=Tier.MEDIUM,
            climate_suitability={"Cold"},
        ),
    )


@pytest.fixture(scope="session")
def bundled_catalog() -> tuple[BreedRecord, ...]:
    return load_breed_catalog()


@pytest.fixture
def fake_narrator() -> FakeNarrator:
    return FakeNarrator()


@pytest.fixture
def narrator_factory():
    return FakeNarrator


@pytest.fixture
def auth_headers(jwt_secret: str) -> dict[str, str]:
    token = create_access_token({"sub": "farmer-1", "language": "hi"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, fake_narrator: FakeNarrator):
    """Runs the real application lifespan, then swaps in the fake narrator."""
    monkeypatch.setattr(main, "configure_logging", lambda: None)
    with TestClient(main.app) as test_client:
        main.app.state.breed_narrator = fake_narrator
        yield test_client
