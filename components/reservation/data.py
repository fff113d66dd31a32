"""Sample reservations loaded at startup."""

from components.reservation.schemas import Reservation

SAMPLE_RESERVATIONS = [
    Reservation(
        id="res-001",
        plan_id="plan-2025",
        category_id="cat-education",
        amount=2000000,
        purpose="Déploiement clinique mobile Nord",
        reserved_by="Clarisse Ebode",
        reserved_date="2025-12-05T10:30:00Z",
        status="active",
        notes="Achat véhicules + équipement médical",
    ),
    Reservation(
        id="res-002",
        plan_id="plan-2025",
        category_id="cat-health",
        amount=5000000,
        purpose="Bourses scolaires S2",
        reserved_by="Agnès Mbarga",
        reserved_date="2025-12-02T14:15:00Z",
        status="utilized",
        utilized_date="2025-12-04T09:20:00Z",
        notes="120 bourses d'études",
    ),
    Reservation(
        id="res-003",
        plan_id="plan-2026-draft",
        category_id="draft-rapid-response",
        amount=1500000,
        purpose="Équipement d'urgence saison sèche",
        reserved_by="Eric Nganou",
        reserved_date="2025-12-04T16:45:00Z",
        status="cancelled",
        cancellation_reason="Projet reporté à 2026",
        notes="Délai procurement dépassé",
    ),
]
