"""Storage initialization and dependency injection."""

import fastapi
from fastapi import Request

from components.core.config import get_settings
from components.core.database import DatabaseManager
from components.plan.repository import PlanRepository
from components.reservation.data import SAMPLE_RESERVATIONS
from components.reservation.repository import build_repository
from components.reservation.service import ReservationService


def init_db(app: fastapi.FastAPI) -> None:
    """Initialize plan and reservation storage on the application state."""
    settings = get_settings()
    db_manager = DatabaseManager() if settings.STORAGE_BACKEND == "sql" else None
    repository = build_repository(
        settings.STORAGE_BACKEND,
        db_manager=db_manager,
        seed=SAMPLE_RESERVATIONS if settings.SEED_RESERVATIONS else None,
    )
    plans = PlanRepository()
    app.state.plans = plans
    app.state.reservations = ReservationService(repository, plans)


def get_plans(request: Request) -> PlanRepository:
    """FastAPI dependency for the plan store."""
    return request.app.state.plans


def get_reservation_service(request: Request) -> ReservationService:
    """FastAPI dependency for reservation operations."""
    return request.app.state.reservations
