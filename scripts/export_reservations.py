"""Script to export a plan's sample reservations to a CSV file."""

import argparse
from pathlib import Path

from components.plan.repository import PlanRepository
from components.reservation.data import SAMPLE_RESERVATIONS
from components.reservation.export import export_plan_reservations
from components.reservation.repository import MemoryReservationRepository
from components.reservation.service import ReservationService


def export_reservations(plan_id: str, output: Path) -> None:
    """Write the CSV export of a plan's reservations to ``output``."""
    plans = PlanRepository()
    service = ReservationService(MemoryReservationRepository(SAMPLE_RESERVATIONS), plans)

    print(f"Exporting reservations of plan {plan_id}...")
    content = export_plan_reservations(plan_id, service, plans)
    output.write_text(content + "\n", encoding="utf-8")

    print(f"Rows written: {len(service.list_by_plan(plan_id))}")
    print(f"Output: {output}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("plan_id", help="ID of the plan to export, e.g. plan-2025")
    parser.add_argument("-o", "--output", type=Path, default=Path("reservations.csv"))
    args = parser.parse_args()
    export_reservations(args.plan_id, args.output)
