"""Plan endpoints for the API."""

import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from components.category import editor
from components.category.schemas import EditorRequest, EditorState
from components.core.init_db import get_plans, get_reservation_service
from components.core.schemas import AuthUser
from components.plan import schemas
from components.plan.repository import PlanRepository
from components.reservation import schemas as reservation_schemas
from components.reservation.export import export_plan_reservations
from components.reservation.service import ReservationService
from restapi.endpoints.auth import get_current_user
from restapi.endpoints.reservation import result_response

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/plans",
    tags=["plans"],
    responses={404: {"description": "Not found"}},
)


def require_plan(plan_id: str, plans: PlanRepository) -> schemas.BudgetPlan:
    plan = plans.find_plan(plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Plan budgétaire non trouvé.")
    return plan


@router.get("", response_model=List[schemas.BudgetPlan])
async def list_plans(plans: PlanRepository = Depends(get_plans)):
    """Get all budget plans."""
    return plans.list_plans()


@router.get("/{plan_id}", response_model=schemas.BudgetPlan)
async def read_plan(plan_id: str, plans: PlanRepository = Depends(get_plans)):
    """Get a specific plan by ID."""
    return require_plan(plan_id, plans)


@router.get("/{plan_id}/overview", response_model=schemas.PlanOverview)
async def get_overview(
    plan_id: str,
    plans: PlanRepository = Depends(get_plans),
    service: ReservationService = Depends(get_reservation_service),
):
    """
    Get plan totals.

    Returns:
    - Total utilized (including converted reservations) and reserved (active
      reservations) amounts
    - Committed amount and utilization rate against the total budget
    - Remaining reserve
    - Utilization percentage per category
    """
    require_plan(plan_id, plans)
    statuses = reservation_schemas.ReservationStatus
    return plans.plan_overview(
        plan_id,
        reserved_by_category=service.amounts_by_category(plan_id, statuses.ACTIVE),
        converted_by_category=service.amounts_by_category(plan_id, statuses.UTILIZED),
    )


@router.get("/{plan_id}/revisions", response_model=List[schemas.PlanRevision])
async def list_revisions(plan_id: str, plans: PlanRepository = Depends(get_plans)):
    """Get the revision history of a plan."""
    require_plan(plan_id, plans)
    return plans.list_revisions(plan_id)


@router.get("/{plan_id}/executions", response_model=List[schemas.ExecutionEntry])
async def list_executions(plan_id: str, plans: PlanRepository = Depends(get_plans)):
    """Get execution tracking entries of a plan."""
    require_plan(plan_id, plans)
    return plans.list_executions(plan_id)


@router.get("/{plan_id}/reservations", response_model=List[reservation_schemas.Reservation])
async def list_plan_reservations(
    plan_id: str,
    service: ReservationService = Depends(get_reservation_service),
):
    """Get all reservations of a plan."""
    return service.list_by_plan(plan_id)


@router.post(
    "/{plan_id}/reservations",
    response_model=reservation_schemas.OperationResult,
    status_code=status.HTTP_201_CREATED,
)
async def create_reservation(
    plan_id: str,
    form: reservation_schemas.ReservationForm,
    service: ReservationService = Depends(get_reservation_service),
    current_user: AuthUser = Depends(get_current_user),
):
    """
    Reserve funds against a plan category.

    Validations:
    - Amount must be a number greater than 0 (spaces are ignored)
    - Plan and category must exist
    - Amount cannot exceed the category's available amount
    """
    result = service.create(plan_id, form, reserved_by=current_user.name)
    return result_response(result, success_status=status.HTTP_201_CREATED)


@router.get("/{plan_id}/reservations/export", response_class=PlainTextResponse)
async def export_reservations(
    plan_id: str,
    plans: PlanRepository = Depends(get_plans),
    service: ReservationService = Depends(get_reservation_service),
):
    """
    Export a plan's reservations as CSV.

    When the plan has no reservations the body is a readable sentence rather
    than a CSV document.
    """
    content = export_plan_reservations(plan_id, service, plans)
    filename = f"reservations-{plan_id}-{date.today().isoformat()}.csv"
    return PlainTextResponse(
        content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/{plan_id}/reservations/statistics",
    response_model=reservation_schemas.ReservationStatistics,
)
async def get_reservation_statistics(
    plan_id: str,
    service: ReservationService = Depends(get_reservation_service),
):
    """Get reservation counts and amounts for a plan."""
    return service.statistics(plan_id)


@router.get(
    "/{plan_id}/categories/{category_id}/reservations",
    response_model=List[reservation_schemas.Reservation],
)
async def list_category_reservations(
    plan_id: str,
    category_id: str,
    service: ReservationService = Depends(get_reservation_service),
):
    """Get all reservations of one category."""
    return service.list_by_category(plan_id, category_id)


@router.get(
    "/{plan_id}/categories/{category_id}/summary",
    response_model=reservation_schemas.CategoryReservationSummary,
)
async def get_category_summary(
    plan_id: str,
    category_id: str,
    plans: PlanRepository = Depends(get_plans),
    service: ReservationService = Depends(get_reservation_service),
):
    """Get reservation amounts by status and the available amount of a category."""
    plan = require_plan(plan_id, plans)
    if plans.find_category(plan, category_id) is None:
        raise HTTPException(status_code=404, detail="Catégorie non trouvée.")

    summary = service.summarize(plan_id, category_id)
    return reservation_schemas.CategoryReservationSummary(
        **summary.model_dump(),
        plan_id=plan_id,
        category_id=category_id,
        available_amount=service.available_amount(plan_id, category_id),
    )


@router.get("/{plan_id}/category-editor", response_model=EditorState)
async def get_category_editor(plan_id: str, plans: PlanRepository = Depends(get_plans)):
    """Get a fresh editor state holding a working copy of the plan's categories."""
    require_plan(plan_id, plans)
    return editor.initial_state(plan_id, plans)


@router.post("/{plan_id}/category-editor", response_model=EditorState)
async def apply_category_editor_action(
    plan_id: str,
    request: EditorRequest,
    plans: PlanRepository = Depends(get_plans),
):
    """
    Apply one action to the submitted editor state and return the next state.

    Only draft plans can be edited. The stored plan is never modified.
    """
    plan = require_plan(plan_id, plans)
    if plan.status != schemas.PlanStatus.DRAFT:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Seuls les plans en brouillon sont modifiables.",
        )

    state = editor.reduce(request.state, request.action)
    if state.feedback is not None and state.feedback.type == "error":
        logger.warning("Category editor rejected %s: %s", request.action.type, state.feedback.message)
    return state
