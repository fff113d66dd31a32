"""Shared fixtures for the BudgetCare API tests."""

from datetime import datetime, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient

from components.core.config import get_settings
from components.plan.repository import PlanRepository
from components.reservation.repository import MemoryReservationRepository
from components.reservation.service import ReservationService

FIXED_NOW = datetime(2025, 12, 5, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def plans() -> PlanRepository:
    """Plan store holding the seeded reference plans."""
    return PlanRepository()


@pytest.fixture
def repository() -> MemoryReservationRepository:
    """An empty in-memory reservation store."""
    return MemoryReservationRepository()


@pytest.fixture
def service(repository: MemoryReservationRepository, plans: PlanRepository) -> ReservationService:
    """Reservation service with a fixed clock and sequential ids."""
    ids = count(1)
    return ReservationService(
        repository,
        plans,
        clock=lambda: FIXED_NOW,
        id_factory=lambda: f"res-test-{next(ids)}",
    )


@pytest.fixture
def settings_env(monkeypatch: pytest.MonkeyPatch):
    """Environment for a fast, seeded, in-memory application."""
    monkeypatch.setenv("LOGIN_DELAY_MS", "0")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("SEED_RESERVATIONS", "true")
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def client(settings_env) -> TestClient:
    """Test client over a freshly created application."""
    from restapi.router import create_app

    return TestClient(create_app())


@pytest.fixture
def auth_headers(client: TestClient) -> dict:
    """Bearer header obtained through the demo login."""
    response = client.post(
        "/auth/login",
        json={"email": "finance@solidcam.org", "password": "BudgetCare!23"},
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}
