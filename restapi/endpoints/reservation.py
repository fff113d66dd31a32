"""Reservation endpoints for the API."""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from components.core.init_db import get_reservation_service
from components.reservation import schemas
from components.reservation.service import ReservationService

router = APIRouter(
    prefix="/reservations",
    tags=["reservations"],
    responses={404: {"description": "Not found"}},
)

ERROR_STATUS = {
    schemas.ErrorCode.INVALID_AMOUNT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    schemas.ErrorCode.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    schemas.ErrorCode.PLAN_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    schemas.ErrorCode.CATEGORY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    schemas.ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    schemas.ErrorCode.INSUFFICIENT_FUNDS: status.HTTP_409_CONFLICT,
    schemas.ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
}


def result_response(result: schemas.OperationResult, success_status: int = status.HTTP_200_OK) -> Any:
    """Turn an operation result into a response, failures with their HTTP status."""
    if result.success:
        if success_status == status.HTTP_200_OK:
            return result
        return JSONResponse(status_code=success_status, content=result.model_dump(mode="json"))
    return JSONResponse(
        status_code=ERROR_STATUS[result.error],
        content=result.model_dump(mode="json", include={"success", "error", "message", "available"}),
    )


@router.get("", response_model=List[schemas.Reservation])
async def list_reservations(
    plan_id: Optional[str] = Query(None, description="Only reservations of this plan"),
    status_filter: Optional[schemas.ReservationStatus] = Query(
        None, alias="status", description="Only reservations with this status"
    ),
    search: Optional[str] = Query(None, description="Text searched in purpose, reserved by and notes"),
    service: ReservationService = Depends(get_reservation_service),
):
    """Get reservations with optional filtering."""
    return service.search(plan_id=plan_id, status=status_filter, term=search)


@router.get("/statistics", response_model=schemas.ReservationStatistics)
async def get_statistics(service: ReservationService = Depends(get_reservation_service)):
    """Get reservation counts and amounts over all plans."""
    return service.statistics()


@router.post("/{reservation_id}/convert", response_model=schemas.OperationResult)
async def convert_reservation(
    reservation_id: str,
    conversion: schemas.ReservationConversion,
    service: ReservationService = Depends(get_reservation_service),
):
    """
    Convert an active reservation to an expense.

    The reservation becomes utilized and the vendor and conversion date are
    appended to its notes. Only active reservations can be converted.
    """
    return result_response(service.convert_to_expense(reservation_id, conversion))


@router.post("/{reservation_id}/cancel", response_model=schemas.OperationResult)
async def cancel_reservation(
    reservation_id: str,
    cancellation: schemas.ReservationCancellation,
    service: ReservationService = Depends(get_reservation_service),
):
    """Cancel an active reservation, releasing its amount."""
    return result_response(service.cancel(reservation_id, cancellation))


@router.delete("/{reservation_id}", response_model=schemas.OperationResult)
async def delete_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service),
):
    """Delete a utilized or cancelled reservation."""
    return result_response(service.delete(reservation_id))
