"""Repository for budget plan reference data."""

import logging
from typing import Dict, List, Optional

import pandas as pd

from components.plan import data
from components.plan import schemas

logger = logging.getLogger(__name__)


class PlanRepository:
    """Read-mostly store of seeded budget plans."""

    def __init__(
        self,
        plans: Optional[List[schemas.BudgetPlan]] = None,
        revisions: Optional[List[schemas.PlanRevision]] = None,
        executions: Optional[List[schemas.ExecutionEntry]] = None,
    ):
        """Initialize repository with seeded plans unless others are given."""
        self._plans = list(data.BUDGET_PLANS if plans is None else plans)
        self._revisions = list(data.PLAN_REVISIONS if revisions is None else revisions)
        self._executions = list(data.EXECUTION_ENTRIES if executions is None else executions)

    def list_plans(self) -> List[schemas.BudgetPlan]:
        """Get all plans in insertion order."""
        return list(self._plans)

    def find_plan(self, plan_id: str) -> Optional[schemas.BudgetPlan]:
        """Get plan by ID."""
        return next((plan for plan in self._plans if plan.id == plan_id), None)

    @staticmethod
    def find_category(
        plan: schemas.BudgetPlan, category_id: str
    ) -> Optional[schemas.BudgetPlanCategory]:
        """Get a category of the plan by ID."""
        return next(
            (category for category in plan.categories if category.id == category_id),
            None,
        )

    def editable_categories(self, plan_id: str) -> List[schemas.BudgetPlanCategory]:
        """Get a detached working copy of a plan's categories."""
        plan = self.find_plan(plan_id)
        if plan is None:
            return []
        return [category.model_copy(deep=True) for category in plan.categories]

    def list_revisions(self, plan_id: str) -> List[schemas.PlanRevision]:
        """Get revisions recorded for a plan."""
        return [revision for revision in self._revisions if revision.plan_id == plan_id]

    def list_executions(self, plan_id: str) -> List[schemas.ExecutionEntry]:
        """Get execution entries recorded for a plan."""
        return [entry for entry in self._executions if entry.plan_id == plan_id]

    def plan_overview(
        self,
        plan_id: str,
        reserved_by_category: Optional[Dict[str, float]] = None,
        converted_by_category: Optional[Dict[str, float]] = None,
    ) -> Optional[schemas.PlanOverview]:
        """
        Compute plan totals over its categories.

        Returns:
        - Total utilized and total reserved amounts
        - Committed amount (utilized + reserved) and its share of the total budget
        - Unallocated reserve, never negative
        - Per-category utilization percentage, clamped to 0..100

        When ``reserved_by_category`` is given it overrides the reserved amount
        stored on each category. ``converted_by_category`` holds converted
        reservation amounts, which count as utilized on top of the category's
        own ``utilized``.
        """
        plan = self.find_plan(plan_id)
        if plan is None:
            return None

        columns = ["id", "label", "allocated", "utilized", "reserved"]
        df = pd.DataFrame(
            [category.model_dump(include=set(columns)) for category in plan.categories],
            columns=columns,
        )
        if reserved_by_category is not None:
            df["reserved"] = df["id"].map(reserved_by_category).fillna(0.0)
        if converted_by_category is not None:
            converted = df["id"].map(converted_by_category).fillna(0.0).astype(float)
            df["utilized"] = df["utilized"].astype(float) + converted

        allocated = df["allocated"].astype(float)
        ratio = (df["utilized"].astype(float) / allocated.where(allocated > 0)) * 100
        df["percentage"] = ((ratio + 0.5) // 1).clip(lower=0, upper=100).fillna(0).astype(int)

        total_utilized = float(df["utilized"].sum())
        total_reserved = float(df["reserved"].sum())
        total_committed = total_utilized + total_reserved
        utilization_rate = total_committed / plan.total_budget if plan.total_budget else 0.0

        logger.debug("Computed overview for plan %s over %d categories", plan_id, len(df))
        return schemas.PlanOverview(
            plan_id=plan.id,
            total_budget=plan.total_budget,
            total_utilized=total_utilized,
            total_reserved=total_reserved,
            total_committed=total_committed,
            utilization_rate=utilization_rate,
            reserve=max(plan.total_budget - total_committed, 0.0),
            is_draft=plan.status == schemas.PlanStatus.DRAFT,
            categories=[
                schemas.CategoryOverview(
                    category_id=row["id"],
                    label=row["label"],
                    allocated=float(row["allocated"]),
                    utilized=float(row["utilized"]),
                    reserved=float(row["reserved"]),
                    utilization_percentage=int(row["percentage"]),
                )
                for row in df.to_dict("records")
            ],
        )
