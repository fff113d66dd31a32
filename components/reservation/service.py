"""Reservation bookkeeping: creation, transitions, summaries and availability."""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Callable, Dict, List, Optional

from components.core.utils import format_amount, is_valid_amount, parse_amount
from components.plan.repository import PlanRepository
from components.reservation.repository import ReservationRepository
from components.reservation.schemas import (
    ErrorCode,
    OperationResult,
    Reservation,
    ReservationCancellation,
    ReservationConversion,
    ReservationForm,
    ReservationStatistics,
    ReservationStatus,
    ReservationSummary,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Réservation non trouvée."

# Utilized and cancelled are terminal
LEGAL_TRANSITIONS = {
    ReservationStatus.ACTIVE: {ReservationStatus.UTILIZED, ReservationStatus.CANCELLED},
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_reservation_id() -> str:
    return f"res-{uuid.uuid4().hex[:12]}"


def summarize_reservations(reservations: List[Reservation]) -> ReservationSummary:
    """Sum reservation amounts grouped by status."""
    summary = ReservationSummary()
    for reservation in reservations:
        summary.total_reserved += reservation.amount
        if reservation.status == ReservationStatus.ACTIVE:
            summary.active_amount += reservation.amount
        elif reservation.status == ReservationStatus.UTILIZED:
            summary.utilized_amount += reservation.amount
        elif reservation.status == ReservationStatus.CANCELLED:
            summary.cancelled_amount += reservation.amount
    return summary


def compute_available(allocated: float, utilized: float, summary: ReservationSummary) -> float:
    """
    Available = allocated - utilized - (active + utilized reservations).

    A category's own ``utilized`` never includes reservation-origin amounts.
    """
    return allocated - utilized - (summary.active_amount + summary.utilized_amount)


def conversion_note(previous: Optional[str], vendor: str, converted_on: date) -> str:
    """Append conversion details to existing notes."""
    note = f"Converti le: {converted_on.strftime('%d/%m/%Y')}\nVendeur: {vendor}"
    if previous:
        return f"{previous}\n\n{note}"
    return note


def check_transition(reservation: Reservation, target: ReservationStatus) -> Optional[str]:
    """Return an error message if ``reservation`` may not move to ``target``."""
    if target in LEGAL_TRANSITIONS.get(reservation.status, set()):
        return None
    if target == ReservationStatus.UTILIZED:
        return "Seules les réservations actives peuvent être converties."
    return "Seules les réservations actives peuvent être annulées."


def failure(error: ErrorCode, message: str, available: Optional[float] = None) -> OperationResult:
    return OperationResult(success=False, error=error, message=message, available=available)


class ReservationService:
    """
    Reservation operations over a repository and the plan store.

    Anticipated failures are returned as ``OperationResult`` values with an
    ``ErrorCode``; nothing here raises for bad input.
    """

    def __init__(
        self,
        repository: ReservationRepository,
        plans: PlanRepository,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = generate_reservation_id,
    ):
        self.repository = repository
        self.plans = plans
        self.clock = clock
        self.id_factory = id_factory

    # Listing

    def list_all(self) -> List[Reservation]:
        """Get all reservations."""
        return self.repository.list()

    def list_by_plan(self, plan_id: str) -> List[Reservation]:
        """Get all reservations for a plan."""
        return [r for r in self.repository.list() if r.plan_id == plan_id]

    def list_by_category(self, plan_id: str, category_id: str) -> List[Reservation]:
        """Get all reservations for one category of a plan."""
        return [
            r
            for r in self.repository.list()
            if r.plan_id == plan_id and r.category_id == category_id
        ]

    def search(
        self,
        plan_id: Optional[str] = None,
        status: Optional[ReservationStatus] = None,
        term: Optional[str] = None,
    ) -> List[Reservation]:
        """
        Filter reservations by plan and status, then by a case-insensitive
        search term matched against purpose, reserved_by and notes.
        """
        reservations = self.list_by_plan(plan_id) if plan_id else self.list_all()
        if status is not None:
            reservations = [r for r in reservations if r.status == status]
        if term:
            needle = term.lower()
            reservations = [
                r
                for r in reservations
                if needle in r.purpose.lower()
                or needle in r.reserved_by.lower()
                or (r.notes is not None and needle in r.notes.lower())
            ]
        return reservations

    # Summaries

    def summarize(self, plan_id: str, category_id: str) -> ReservationSummary:
        """Sum reservation amounts by status for one category."""
        return summarize_reservations(self.list_by_category(plan_id, category_id))

    def available_amount(self, plan_id: str, category_id: str) -> float:
        """Amount still free in a category; 0 when plan or category is unknown."""
        plan = self.plans.find_plan(plan_id)
        if plan is None:
            return 0.0
        category = self.plans.find_category(plan, category_id)
        if category is None:
            return 0.0
        return compute_available(
            category.allocated, category.utilized, self.summarize(plan_id, category_id)
        )

    def amounts_by_category(self, plan_id: str, status: ReservationStatus) -> Dict[str, float]:
        """Reservation totals of one status keyed by category ID."""
        totals: Dict[str, float] = {}
        for reservation in self.list_by_plan(plan_id):
            if reservation.status == status:
                totals[reservation.category_id] = (
                    totals.get(reservation.category_id, 0.0) + reservation.amount
                )
        return totals

    def statistics(self, plan_id: Optional[str] = None) -> ReservationStatistics:
        """Counts per status and active/utilized amounts, for a plan or overall."""
        reservations = self.list_by_plan(plan_id) if plan_id else self.list_all()
        summary = summarize_reservations(reservations)
        return ReservationStatistics(
            total_reservations=len(reservations),
            active_amount=summary.active_amount,
            utilized_amount=summary.utilized_amount,
            active_count=sum(r.status == ReservationStatus.ACTIVE for r in reservations),
            utilized_count=sum(r.status == ReservationStatus.UTILIZED for r in reservations),
            cancelled_count=sum(r.status == ReservationStatus.CANCELLED for r in reservations),
        )

    # Mutations

    def create(self, plan_id: str, form: ReservationForm, reserved_by: str) -> OperationResult:
        """Create an active reservation if the category has enough available funds."""
        amount = parse_amount(form.amount)
        if not is_valid_amount(amount):
            return self._reject(
                "create", failure(ErrorCode.INVALID_AMOUNT, "Le montant doit être supérieur à 0.")
            )

        plan = self.plans.find_plan(plan_id)
        if plan is None:
            return self._reject(
                "create", failure(ErrorCode.PLAN_NOT_FOUND, "Plan budgétaire non trouvé.")
            )

        category = self.plans.find_category(plan, form.category_id)
        if category is None:
            return self._reject(
                "create", failure(ErrorCode.CATEGORY_NOT_FOUND, "Catégorie non trouvée.")
            )

        available = compute_available(
            category.allocated,
            category.utilized,
            self.summarize(plan_id, form.category_id),
        )
        if amount > available:
            return self._reject(
                "create",
                failure(
                    ErrorCode.INSUFFICIENT_FUNDS,
                    f"Montant insuffisant. Disponible: {format_amount(available)} "
                    f"{plan.currency.value}",
                    available=available,
                ),
            )

        notes = form.notes.strip() if form.notes else ""
        reservation = Reservation(
            id=self.id_factory(),
            plan_id=plan_id,
            category_id=form.category_id,
            amount=amount,
            purpose=form.purpose.strip(),
            reserved_by=reserved_by,
            reserved_date=self.clock(),
            status=ReservationStatus.ACTIVE,
            notes=notes or None,
        )
        self.repository.insert(reservation)
        logger.info(
            "Reservation %s created: %s on %s/%s by %s",
            reservation.id, amount, plan_id, form.category_id, reserved_by,
        )
        return OperationResult(
            success=True,
            message="Réservation créée avec succès !",
            reservation=reservation,
            available=available - amount,
        )

    def convert_to_expense(
        self, reservation_id: str, conversion: ReservationConversion
    ) -> OperationResult:
        """Mark an active reservation as utilized and record the vendor in its notes."""
        reservation = self.repository.find(reservation_id)
        if reservation is None:
            return self._reject("convert", failure(ErrorCode.NOT_FOUND, NOT_FOUND_MESSAGE))

        error = check_transition(reservation, ReservationStatus.UTILIZED)
        if error:
            return self._reject("convert", failure(ErrorCode.INVALID_TRANSITION, error))

        now = self.clock()
        reservation.status = ReservationStatus.UTILIZED
        reservation.utilized_date = now
        reservation.notes = conversion_note(
            reservation.notes, conversion.vendor, conversion.date or now.date()
        )
        self.repository.update(reservation)
        logger.info(
            "Reservation %s converted to %s (vendor %s)",
            reservation_id, conversion.transaction_type, conversion.vendor,
        )
        return OperationResult(
            success=True, message="Réservation convertie en dépense.", reservation=reservation
        )

    def cancel(self, reservation_id: str, cancellation: ReservationCancellation) -> OperationResult:
        """Cancel an active reservation, releasing its amount."""
        reservation = self.repository.find(reservation_id)
        if reservation is None:
            return self._reject("cancel", failure(ErrorCode.NOT_FOUND, NOT_FOUND_MESSAGE))

        error = check_transition(reservation, ReservationStatus.CANCELLED)
        if error:
            return self._reject("cancel", failure(ErrorCode.INVALID_TRANSITION, error))

        reservation.status = ReservationStatus.CANCELLED
        reservation.cancellation_reason = cancellation.reason.strip()
        self.repository.update(reservation)
        logger.info("Reservation %s cancelled", reservation_id)
        return OperationResult(
            success=True, message="Réservation annulée.", reservation=reservation
        )

    def delete(self, reservation_id: str) -> OperationResult:
        """Delete a reservation that is no longer active."""
        reservation = self.repository.find(reservation_id)
        if reservation is None:
            return self._reject("delete", failure(ErrorCode.NOT_FOUND, NOT_FOUND_MESSAGE))

        if reservation.status == ReservationStatus.ACTIVE:
            return self._reject(
                "delete",
                failure(
                    ErrorCode.INVALID_TRANSITION,
                    "Impossible de supprimer une réservation active. Annulez-la d'abord.",
                ),
            )

        self.repository.delete(reservation_id)
        logger.info("Reservation %s deleted", reservation_id)
        return OperationResult(success=True, message="Réservation supprimée.")

    @staticmethod
    def _reject(operation: str, result: OperationResult) -> OperationResult:
        logger.warning("Reservation %s rejected (%s): %s", operation, result.error.value, result.message)
        return result
