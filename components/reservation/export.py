"""CSV export of a plan's reservations."""

from datetime import datetime
from typing import Optional

from components.plan.repository import PlanRepository
from components.reservation.service import ReservationService

NO_RESERVATIONS_MESSAGE = "Aucune réservation trouvée pour ce plan."
PLAN_NOT_FOUND_MESSAGE = "Plan budgétaire non trouvé."
UNKNOWN_CATEGORY_LABEL = "Catégorie inconnue"

HEADERS = [
    "ID",
    "Catégorie",
    "Montant",
    "Devise",
    "Purpose",
    "Réservé par",
    "Date réservation",
    "Statut",
    "Date utilisation",
    "Raison annulation",
    "Notes",
]


def _quoted(value: Optional[str]) -> str:
    # Fixed-field quoting: embedded quotes are not escaped
    return f'"{value or ""}"'


def _number(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else str(amount)


def _day(value: Optional[datetime]) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


def export_plan_reservations(
    plan_id: str, service: ReservationService, plans: PlanRepository
) -> str:
    """
    Serialize a plan's reservations as comma-separated text.

    When there is nothing to export a readable sentence is returned instead of
    a document; callers display it as is.
    """
    reservations = service.list_by_plan(plan_id)
    if not reservations:
        return NO_RESERVATIONS_MESSAGE

    plan = plans.find_plan(plan_id)
    if plan is None:
        return PLAN_NOT_FOUND_MESSAGE

    labels = {category.id: category.label for category in plan.categories}
    rows = [",".join(HEADERS)]
    for reservation in reservations:
        rows.append(
            ",".join(
                [
                    reservation.id,
                    _quoted(labels.get(reservation.category_id, UNKNOWN_CATEGORY_LABEL)),
                    _number(reservation.amount),
                    plan.currency.value,
                    _quoted(reservation.purpose),
                    _quoted(reservation.reserved_by),
                    _day(reservation.reserved_date),
                    reservation.status.value,
                    _day(reservation.utilized_date),
                    _quoted(reservation.cancellation_reason),
                    _quoted(reservation.notes),
                ]
            )
        )
    return "\n".join(rows)
