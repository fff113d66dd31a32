"""Seeded reference data for budget plans."""

from components.plan.schemas import BudgetPlan, ExecutionEntry, PlanRevision

BUDGET_PLANS = [
    BudgetPlan(
        id="plan-2025",
        organization_id="ngo-001",
        name="Plan budgétaire 2025",
        owner="Agnès Mbarga",
        fiscal_period={"start": "2025-01-01", "end": "2025-12-31"},
        total_budget=150000000,
        currency="XAF",
        status="validated",
        categories=[
            {
                "id": "cat-education",
                "label": "Education inclusive",
                "owner": "Agnès Mbarga",
                "allocated": 48000000,
                "utilized": 32000000,
                "notes": "Priorité équipements pédagogiques et bourses",
            },
            {
                "id": "cat-health",
                "label": "Santé communautaire",
                "owner": "Eric Nganou",
                "allocated": 42000000,
                "utilized": 31000000,
                "notes": "Opérations cliniques mobiles et stocks pharmaceutiques",
            },
            {
                "id": "cat-climate",
                "label": "Agroécologie et climat",
                "owner": "Fanny Essama",
                "allocated": 28000000,
                "utilized": 9000000,
                "notes": "Reboisement zones critiques et kits coopératives",
            },
            {
                "id": "cat-ops",
                "label": "Fonctionnement et conformité",
                "owner": "Service Finance",
                "allocated": 32000000,
                "utilized": 18000000,
                "notes": "Audit externe, systèmes d'information et contingence",
            },
        ],
        objectives=[
            "Stabiliser les programmes prioritaires tout en gardant 20% de réserve",
            "Garantir la conformité bailleurs UNICEF et AFD",
            "Accélérer l'autonomie des coopératives agroécologiques",
        ],
        updated_at="2025-11-28T09:15:00Z",
    ),
    BudgetPlan(
        id="plan-2024-reforecast",
        organization_id="ngo-001",
        name="Reforecast S2 2024",
        owner="Comité Budget",
        fiscal_period={"start": "2024-07-01", "end": "2024-12-31"},
        total_budget=72000000,
        currency="XAF",
        status="reforecast",
        categories=[
            {
                "id": "cat-education-2024",
                "label": "Education inclusive",
                "owner": "Agnès Mbarga",
                "allocated": 25000000,
                "utilized": 21000000,
            },
            {
                "id": "cat-health-2024",
                "label": "Santé communautaire",
                "owner": "Eric Nganou",
                "allocated": 22000000,
                "utilized": 19500000,
            },
            {
                "id": "cat-ops-2024",
                "label": "Fonctionnement et conformité",
                "owner": "Service Finance",
                "allocated": 25000000,
                "utilized": 20000000,
                "notes": "Renfort logistique S2",
            },
        ],
        objectives=[
            "Réattribuer les reliquats suite au glissement de planning",
            "Assurer l'ajustement des salaires terrain face à l'inflation",
        ],
        updated_at="2024-10-15T17:45:00Z",
    ),
    BudgetPlan(
        id="plan-2026-draft",
        organization_id="ngo-001",
        name="Projet de budget 2026",
        owner="Service Finance",
        fiscal_period={"start": "2026-01-01", "end": "2026-12-31"},
        total_budget=160000000,
        currency="XAF",
        status="draft",
        categories=[
            {
                "id": "draft-education",
                "label": "Education inclusive",
                "owner": "Agnès Mbarga",
                "allocated": 50000000,
                "utilized": 0,
            },
            {
                "id": "draft-rapid-response",
                "label": "Réponse rapide aux urgences",
                "owner": "Eric Nganou",
                "allocated": 12000000,
                "utilized": 0,
                "notes": "Stocks pré-positionnés saison sèche",
            },
        ],
        objectives=[
            "Constituer un fonds de réponse rapide",
        ],
        updated_at="2025-12-01T08:00:00Z",
    ),
]

PLAN_REVISIONS = [
    PlanRevision(
        id="rev-001",
        plan_id="plan-2025",
        date="2025-02-12",
        author="Eric Nganou",
        type="adjustment",
        summary="Réallocation d'urgence vers la clinique mobile Nord",
        impacts=[
            {
                "category": "Santé communautaire",
                "delta": 3000000,
                "narrative": "Augmentation couverture carburant et maintenance des vans",
            },
            {
                "category": "Fonctionnement et conformité",
                "delta": -3000000,
                "narrative": "Réduction du budget contingence Q1",
            },
        ],
    ),
    PlanRevision(
        id="rev-002",
        plan_id="plan-2025",
        date="2025-05-30",
        author="Comité Budget",
        type="donor-request",
        summary="Alignement sur nouvelle matrice UNICEF",
        impacts=[
            {
                "category": "Education inclusive",
                "delta": 2500000,
                "narrative": "Financement de 1 200 kits STEM filles",
            },
        ],
    ),
    PlanRevision(
        id="rev-003",
        plan_id="plan-2024-reforecast",
        date="2024-09-08",
        author="Service Finance",
        type="risk-mitigation",
        summary="Gel des dépenses non critiques jusqu'à réception tranche bailleur",
        impacts=[
            {
                "category": "Fonctionnement et conformité",
                "delta": -1500000,
                "narrative": "Gel consultants externes",
            },
        ],
    ),
]

EXECUTION_ENTRIES = [
    ExecutionEntry(
        id="exec-jan",
        plan_id="plan-2025",
        period="Janvier 2025",
        committed=11800000,
        disbursed=9400000,
        completion_rate=0.78,
        risk_level="medium",
        highlight="Lancement des cohortes scolaires et campagne vaccination",
        blocker="Retard d'approvisionnement TICE",
    ),
    ExecutionEntry(
        id="exec-mar",
        plan_id="plan-2025",
        period="Mars 2025",
        committed=14200000,
        disbursed=12600000,
        completion_rate=0.89,
        risk_level="low",
        highlight="Achèvement audit externe et signature bailleurs",
    ),
    ExecutionEntry(
        id="exec-may",
        plan_id="plan-2025",
        period="Mai 2025",
        committed=16500000,
        disbursed=14900000,
        completion_rate=0.9,
        risk_level="medium",
        highlight="Déploiement de 3 nouvelles cliniques mobiles",
        blocker="Plafond bancaire atteint sur compte projet santé",
    ),
    ExecutionEntry(
        id="exec-oct-2024",
        plan_id="plan-2024-reforecast",
        period="Octobre 2024",
        committed=9800000,
        disbursed=8200000,
        completion_rate=0.84,
        risk_level="high",
        highlight="Maintien des classes communautaires malgré retards de dons",
        blocker="Cash-call bailleur différé de 3 semaines",
    ),
]
