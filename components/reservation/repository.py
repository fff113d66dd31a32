"""Repositories for reservation storage."""

import logging
from abc import ABC, abstractmethod
from datetime import timezone
from typing import Iterable, List, Optional

from sqlalchemy import delete, select

from components.core.database import DatabaseManager
from components.reservation import models
from components.reservation.schemas import Reservation

logger = logging.getLogger(__name__)


class ReservationRepository(ABC):
    """
    Storage contract for reservations.

    Implementations return detached copies: mutating a returned record never
    changes stored state until it is passed back to ``update()``.
    """

    @abstractmethod
    def list(self) -> List[Reservation]:
        ...

    @abstractmethod
    def find(self, reservation_id: str) -> Optional[Reservation]:
        ...

    @abstractmethod
    def insert(self, reservation: Reservation) -> None:
        ...

    @abstractmethod
    def update(self, reservation: Reservation) -> None:
        ...

    @abstractmethod
    def delete(self, reservation_id: str) -> bool:
        ...


class MemoryReservationRepository(ReservationRepository):
    """Ordered in-memory list; state lasts as long as the process."""

    def __init__(self, reservations: Optional[Iterable[Reservation]] = None) -> None:
        self._reservations: List[Reservation] = [
            reservation.model_copy(deep=True) for reservation in reservations or []
        ]

    def list(self) -> List[Reservation]:
        return [reservation.model_copy(deep=True) for reservation in self._reservations]

    def find(self, reservation_id: str) -> Optional[Reservation]:
        index = self._index_of(reservation_id)
        if index is None:
            return None
        return self._reservations[index].model_copy(deep=True)

    def insert(self, reservation: Reservation) -> None:
        self._reservations.append(reservation.model_copy(deep=True))

    def update(self, reservation: Reservation) -> None:
        index = self._index_of(reservation.id)
        if index is None:
            raise KeyError(reservation.id)
        self._reservations[index] = reservation.model_copy(deep=True)

    def delete(self, reservation_id: str) -> bool:
        index = self._index_of(reservation_id)
        if index is None:
            return False
        del self._reservations[index]
        return True

    def _index_of(self, reservation_id: str) -> Optional[int]:
        for index, reservation in enumerate(self._reservations):
            if reservation.id == reservation_id:
                return index
        return None


class SqlReservationRepository(ReservationRepository):
    """Reservation table accessed through SQLAlchemy sessions."""

    def __init__(self, db_manager: DatabaseManager):
        """Initialize repository with a database manager."""
        self.db_manager = db_manager

    def list(self) -> List[Reservation]:
        with self.db_manager.get_db() as session:
            rows = session.execute(
                select(models.Reservation).order_by(models.Reservation.pk)
            ).scalars().all()
            return [self._to_schema(row) for row in rows]

    def find(self, reservation_id: str) -> Optional[Reservation]:
        with self.db_manager.get_db() as session:
            row = session.execute(
                select(models.Reservation).where(models.Reservation.id == reservation_id)
            ).scalar_one_or_none()
            return self._to_schema(row) if row else None

    def insert(self, reservation: Reservation) -> None:
        with self.db_manager.get_db() as session:
            session.add(models.Reservation(**self._to_columns(reservation)))
            session.commit()

    def update(self, reservation: Reservation) -> None:
        with self.db_manager.get_db() as session:
            row = session.execute(
                select(models.Reservation).where(models.Reservation.id == reservation.id)
            ).scalar_one_or_none()
            if row is None:
                raise KeyError(reservation.id)
            for column, value in self._to_columns(reservation).items():
                setattr(row, column, value)
            session.commit()

    def delete(self, reservation_id: str) -> bool:
        with self.db_manager.get_db() as session:
            result = session.execute(
                delete(models.Reservation).where(models.Reservation.id == reservation_id)
            )
            session.commit()
            return result.rowcount > 0

    @staticmethod
    def _to_columns(reservation: Reservation) -> dict:
        columns = reservation.model_dump()
        columns["status"] = reservation.status.value
        return columns

    @staticmethod
    def _to_schema(row: models.Reservation) -> Reservation:
        reservation = Reservation.model_validate(row)
        # SQLite drops the offset, values are always stored in UTC
        for field in ("reserved_date", "utilized_date"):
            value = getattr(reservation, field)
            if value is not None and value.tzinfo is None:
                setattr(reservation, field, value.replace(tzinfo=timezone.utc))
        return reservation


def build_repository(
    backend: str,
    db_manager: Optional[DatabaseManager] = None,
    seed: Optional[Iterable[Reservation]] = None,
) -> ReservationRepository:
    """Create the repository for the configured storage backend."""
    if backend == "memory":
        repository: ReservationRepository = MemoryReservationRepository()
    elif backend == "sql":
        repository = SqlReservationRepository(db_manager or DatabaseManager())
    else:
        raise ValueError(f"Unknown storage backend: {backend!r}")

    for reservation in seed or []:
        repository.insert(reservation)
    logger.info("Reservation storage ready (%s backend)", backend)
    return repository
