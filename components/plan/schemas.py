"""Pydantic schemas for budget plan data."""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class PlanStatus(str, Enum):
    """Lifecycle status of a budget plan."""
    DRAFT = "draft"
    VALIDATED = "validated"
    REFORECAST = "reforecast"


class CurrencyCode(str, Enum):
    XAF = "XAF"
    USD = "USD"


class FiscalPeriod(BaseModel):
    """Schema for a plan's fiscal period."""
    start: date
    end: date


class BudgetPlanCategory(BaseModel):
    """Schema for a budget line within a plan."""
    id: str
    label: str
    owner: str
    allocated: float = Field(ge=0)
    utilized: float = 0
    reserved: float = 0
    notes: Optional[str] = None


class BudgetPlan(BaseModel):
    """Schema for a budget plan."""
    id: str
    organization_id: str
    name: str
    owner: str
    fiscal_period: FiscalPeriod
    total_budget: float
    currency: CurrencyCode
    status: PlanStatus
    categories: List[BudgetPlanCategory]
    objectives: List[str] = []
    updated_at: datetime


class RevisionImpact(BaseModel):
    """Schema for the effect of a revision on one category."""
    category: str
    delta: float
    narrative: str


class PlanRevision(BaseModel):
    """Schema for a plan revision."""
    id: str
    plan_id: str
    date: date
    author: str
    type: str
    summary: str
    impacts: List[RevisionImpact]


class ExecutionEntry(BaseModel):
    """Schema for a period of plan execution."""
    id: str
    plan_id: str
    period: str
    committed: float
    disbursed: float
    completion_rate: float
    risk_level: str
    highlight: str
    blocker: Optional[str] = None


class CategoryOverview(BaseModel):
    """Schema for one category line in a plan overview."""
    category_id: str
    label: str
    allocated: float
    utilized: float
    reserved: float
    utilization_percentage: int


class PlanOverview(BaseModel):
    """Schema for plan overview totals."""
    plan_id: str
    total_budget: float
    total_utilized: float
    total_reserved: float
    total_committed: float
    utilization_rate: float
    reserve: float
    is_draft: bool
    categories: List[CategoryOverview]
