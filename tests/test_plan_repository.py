"""Tests for the budget plan store and overview."""

import pytest

from components.plan.repository import PlanRepository
from components.plan.schemas import PlanStatus


class TestPlanStore:
    def test_list_plans_in_insertion_order(self, plans: PlanRepository) -> None:
        assert [p.id for p in plans.list_plans()] == [
            "plan-2025",
            "plan-2024-reforecast",
            "plan-2026-draft",
        ]

    def test_find_plan(self, plans: PlanRepository) -> None:
        plan = plans.find_plan("plan-2025")

        assert plan.status == PlanStatus.VALIDATED
        assert plan.currency.value == "XAF"
        assert plans.find_plan("plan-missing") is None

    def test_find_category(self, plans: PlanRepository) -> None:
        plan = plans.find_plan("plan-2025")

        assert plans.find_category(plan, "cat-health").allocated == 42000000
        assert plans.find_category(plan, "cat-missing") is None

    def test_editable_categories_are_detached(self, plans: PlanRepository) -> None:
        copies = plans.editable_categories("plan-2025")
        copies[0].allocated = 1

        assert plans.find_plan("plan-2025").categories[0].allocated == 48000000
        assert plans.editable_categories("plan-missing") == []

    def test_revisions_and_executions(self, plans: PlanRepository) -> None:
        assert [r.id for r in plans.list_revisions("plan-2025")] == ["rev-001", "rev-002"]
        assert [e.id for e in plans.list_executions("plan-2024-reforecast")] == ["exec-oct-2024"]
        assert plans.list_revisions("plan-2026-draft") == []


class TestPlanOverview:
    def test_totals_with_reservations(self, plans: PlanRepository) -> None:
        overview = plans.plan_overview("plan-2025", {"cat-education": 2000000})

        assert overview.total_utilized == 90000000
        assert overview.total_reserved == 2000000
        assert overview.total_committed == 92000000
        assert overview.utilization_rate == pytest.approx(92 / 150)
        assert overview.reserve == 58000000
        assert overview.is_draft is False
        assert [c.utilization_percentage for c in overview.categories] == [67, 74, 32, 56]
        assert [c.reserved for c in overview.categories] == [2000000, 0, 0, 0]

    def test_converted_amounts_count_as_utilized(self, plans: PlanRepository) -> None:
        overview = plans.plan_overview(
            "plan-2025", {"cat-education": 2000000}, converted_by_category={"cat-health": 5000000}
        )

        assert overview.total_utilized == 95000000
        assert overview.total_committed == 97000000
        assert overview.reserve == 53000000
        assert [c.utilized for c in overview.categories] == [32000000, 36000000, 9000000, 18000000]
        assert [c.utilization_percentage for c in overview.categories] == [67, 86, 32, 56]

    def test_totals_use_stored_reserved_by_default(self, plans: PlanRepository) -> None:
        overview = plans.plan_overview("plan-2026-draft")

        assert overview.total_reserved == 0
        assert overview.total_utilized == 0
        assert overview.reserve == 160000000
        assert overview.is_draft is True
        assert [c.utilization_percentage for c in overview.categories] == [0, 0]

    def test_unknown_plan(self, plans: PlanRepository) -> None:
        assert plans.plan_overview("plan-missing") is None

    def test_plan_without_categories(self) -> None:
        plan = PlanRepository().find_plan("plan-2025").model_copy(update={"categories": []})
        overview = PlanRepository(plans=[plan]).plan_overview("plan-2025")

        assert overview.total_committed == 0
        assert overview.categories == []
