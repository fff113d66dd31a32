"""Pydantic schemas for reservation data validation."""

import datetime as dt
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ReservationStatus(str, Enum):
    """Reservation lifecycle: active, then utilized or cancelled."""
    ACTIVE = "active"
    UTILIZED = "utilized"
    CANCELLED = "cancelled"


class ErrorCode(str, Enum):
    """Codes of anticipated operation failures."""
    INVALID_AMOUNT = "invalid_amount"
    PLAN_NOT_FOUND = "plan_not_found"
    CATEGORY_NOT_FOUND = "category_not_found"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_TRANSITION = "invalid_transition"
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"


class ReservationBase(BaseModel):
    """Base reservation schema."""
    plan_id: str
    category_id: str
    amount: float = Field(gt=0)
    purpose: str
    reserved_by: str
    reserved_date: dt.datetime
    status: ReservationStatus = ReservationStatus.ACTIVE
    utilized_date: Optional[dt.datetime] = None
    cancellation_reason: Optional[str] = None
    notes: Optional[str] = None


class Reservation(ReservationBase):
    """Schema for a stored reservation."""
    id: str

    class Config:
        from_attributes = True


class ReservationForm(BaseModel):
    """Schema for the reservation creation form; amount is raw user text."""
    category_id: str
    amount: str
    purpose: str = ""
    notes: Optional[str] = None


class ReservationConversion(BaseModel):
    """Schema for converting a reservation to an expense."""
    vendor: str
    date: Optional[dt.date] = None
    transaction_type: str = "expense"


class ReservationCancellation(BaseModel):
    """Schema for cancelling a reservation."""
    reason: str


class ReservationSummary(BaseModel):
    """Schema for reservation amounts by status for one category."""
    total_reserved: float = 0
    active_amount: float = 0
    utilized_amount: float = 0
    cancelled_amount: float = 0


class CategoryReservationSummary(ReservationSummary):
    """Schema for a category summary with its available amount."""
    plan_id: str
    category_id: str
    available_amount: float


class ReservationStatistics(BaseModel):
    """Schema for reservation counts and amounts over a plan."""
    total_reservations: int = 0
    active_amount: float = 0
    utilized_amount: float = 0
    active_count: int = 0
    utilized_count: int = 0
    cancelled_count: int = 0


class OperationResult(BaseModel):
    """Schema for the outcome of a reservation operation."""
    success: bool
    error: Optional[ErrorCode] = None
    message: str = ""
    reservation: Optional[Reservation] = None
    available: Optional[float] = None
