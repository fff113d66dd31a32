"""Endpoint tests over a freshly seeded application."""

import base64

from fastapi.testclient import TestClient

from components.core.config import get_settings

LOGIN = {"email": "finance@solidcam.org", "password": "BudgetCare!23"}


class TestHealthAndAuth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_login_success(self, client: TestClient) -> None:
        response = client.post("/auth/login", json={**LOGIN, "email": "Finance@SolidCam.org"})

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["email"] == "finance@solidcam.org"
        email, _, timestamp = base64.b64decode(body["token"]).decode().rpartition(":")
        assert email == "finance@solidcam.org"
        assert timestamp.isdigit()

    def test_login_invalid_credentials(self, client: TestClient) -> None:
        response = client.post("/auth/login", json={**LOGIN, "password": "wrong-password"})

        assert response.status_code == 401
        assert response.json() == {"message": "Identifiants invalides"}

    def test_login_uses_configured_credentials(self, settings_env) -> None:
        settings_env.setenv("DEMO_EMAIL", "admin@ngo.org")
        settings_env.setenv("DEMO_PASSWORD", "Secret!2025")
        get_settings.cache_clear()
        from restapi.router import create_app

        client = TestClient(create_app())

        assert client.post("/auth/login", json=LOGIN).status_code == 401
        response = client.post(
            "/auth/login", json={"email": "admin@ngo.org", "password": "Secret!2025"}
        )
        assert response.status_code == 200

    def test_reservation_creation_requires_token(self, client: TestClient) -> None:
        response = client.post(
            "/plans/plan-2025/reservations",
            json={"category_id": "cat-education", "amount": "1000", "purpose": "x"},
        )
        assert response.status_code == 401

    def test_invalid_token_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/plans/plan-2025/reservations",
            json={"category_id": "cat-education", "amount": "1000", "purpose": "x"},
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.status_code == 401


class TestPlanEndpoints:
    def test_list_and_read_plans(self, client: TestClient) -> None:
        plans = client.get("/plans").json()

        assert [p["id"] for p in plans] == ["plan-2025", "plan-2024-reforecast", "plan-2026-draft"]
        assert client.get("/plans/plan-2025").json()["status"] == "validated"
        assert client.get("/plans/plan-missing").status_code == 404

    def test_overview_counts_reservations(self, client: TestClient) -> None:
        overview = client.get("/plans/plan-2025/overview").json()

        # res-001 (2M) is active, res-002 (5M) was converted on cat-health
        assert overview["total_reserved"] == 2000000
        assert overview["total_utilized"] == 95000000
        assert overview["total_committed"] == 97000000
        assert overview["reserve"] == 53000000
        health = next(c for c in overview["categories"] if c["category_id"] == "cat-health")
        assert health["utilized"] == 36000000
        assert health["utilization_percentage"] == 86

    def test_overview_committed_unchanged_by_conversion(
        self, client: TestClient, auth_headers: dict
    ) -> None:
        created = client.post(
            "/plans/plan-2025/reservations",
            json={"category_id": "cat-education", "amount": "1000000", "purpose": "Bus"},
            headers=auth_headers,
        ).json()["reservation"]
        before = client.get("/plans/plan-2025/overview").json()

        response = client.post(f"/reservations/{created['id']}/convert", json={"vendor": "ACME"})
        after = client.get("/plans/plan-2025/overview").json()

        assert response.status_code == 200
        assert after["total_committed"] == before["total_committed"]
        assert after["total_reserved"] == before["total_reserved"] - 1000000
        assert after["total_utilized"] == before["total_utilized"] + 1000000
        summary = client.get("/plans/plan-2025/categories/cat-education/summary").json()
        assert summary["available_amount"] == 13000000

    def test_revisions_and_executions(self, client: TestClient) -> None:
        assert len(client.get("/plans/plan-2025/revisions").json()) == 2
        assert len(client.get("/plans/plan-2025/executions").json()) == 3
        assert client.get("/plans/plan-missing/revisions").status_code == 404

    def test_category_summary(self, client: TestClient) -> None:
        summary = client.get("/plans/plan-2025/categories/cat-health/summary").json()

        assert summary["utilized_amount"] == 5000000
        assert summary["available_amount"] == 6000000
        assert client.get("/plans/plan-2025/categories/cat-x/summary").status_code == 404

    def test_statistics(self, client: TestClient) -> None:
        stats = client.get("/plans/plan-2025/reservations/statistics").json()

        assert stats["total_reservations"] == 2
        assert stats["active_count"] == 1
        assert stats["utilized_count"] == 1
        assert client.get("/reservations/statistics").json()["cancelled_count"] == 1


class TestReservationEndpoints:
    def test_create_reservation(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/plans/plan-2025/reservations",
            json={"category_id": "cat-education", "amount": "1 000 000", "purpose": "Bus"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["reservation"]["reserved_by"] == "Agnès Mbarga"
        assert body["reservation"]["status"] == "active"
        summary = client.get("/plans/plan-2025/categories/cat-education/summary").json()
        assert summary["available_amount"] == 13000000

    def test_create_insufficient_funds(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/plans/plan-2025/reservations",
            json={"category_id": "cat-education", "amount": "14000001", "purpose": "Trop"},
            headers=auth_headers,
        )

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "insufficient_funds"
        assert body["available"] == 14000000

    def test_create_invalid_amount(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/plans/plan-2025/reservations",
            json={"category_id": "cat-education", "amount": "abc", "purpose": "x"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["error"] == "invalid_amount"

    def test_create_on_unknown_category(self, client: TestClient, auth_headers: dict) -> None:
        response = client.post(
            "/plans/plan-2025/reservations",
            json={"category_id": "cat-x", "amount": "10", "purpose": "x"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["error"] == "category_not_found"

    def test_convert_then_delete(self, client: TestClient) -> None:
        response = client.post(
            "/reservations/res-001/convert", json={"vendor": "ACME", "date": "2025-01-01"}
        )

        assert response.status_code == 200
        reservation = response.json()["reservation"]
        assert reservation["status"] == "utilized"
        assert "ACME" in reservation["notes"]

        again = client.post("/reservations/res-001/convert", json={"vendor": "ACME"})
        assert again.status_code == 409
        assert again.json()["error"] == "invalid_transition"

        assert client.delete("/reservations/res-001").status_code == 200
        assert client.delete("/reservations/res-001").status_code == 404

    def test_cancel(self, client: TestClient) -> None:
        response = client.post("/reservations/res-001/cancel", json={"reason": " Reporté "})

        assert response.status_code == 200
        assert response.json()["reservation"]["cancellation_reason"] == "Reporté"

    def test_delete_active_is_refused(self, client: TestClient) -> None:
        response = client.delete("/reservations/res-001")

        assert response.status_code == 409
        ids = [r["id"] for r in client.get("/reservations").json()]
        assert "res-001" in ids

    def test_filters(self, client: TestClient) -> None:
        assert [r["id"] for r in client.get("/reservations?status=cancelled").json()] == ["res-003"]
        assert [r["id"] for r in client.get("/reservations?search=clinique").json()] == ["res-001"]
        assert len(client.get("/reservations?plan_id=plan-2025").json()) == 2
        assert len(client.get("/plans/plan-2025/reservations").json()) == 2
        by_category = client.get("/plans/plan-2025/categories/cat-health/reservations").json()
        assert [r["id"] for r in by_category] == ["res-002"]

    def test_export(self, client: TestClient) -> None:
        response = client.get("/plans/plan-2025/reservations/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        lines = response.text.split("\n")
        assert lines[0].startswith("ID,Catégorie,Montant")
        assert len(lines) == 3

    def test_export_without_reservations(self, client: TestClient) -> None:
        response = client.get("/plans/plan-2024-reforecast/reservations/export")

        assert response.text == "Aucune réservation trouvée pour ce plan."


class TestCategoryEditorEndpoints:
    def test_editor_round_trip(self, client: TestClient) -> None:
        state = client.get("/plans/plan-2026-draft/category-editor").json()
        assert len(state["categories"]) == 2

        for field, value in (("label", "Logistique"), ("owner", "Service Finance"), ("allocated", "500")):
            state = client.post(
                "/plans/plan-2026-draft/category-editor",
                json={"state": state, "action": {"type": "update_add_form", "field": field, "value": value}},
            ).json()
        state = client.post(
            "/plans/plan-2026-draft/category-editor",
            json={"state": state, "action": {"type": "add_category"}},
        ).json()

        assert len(state["categories"]) == 3
        assert state["feedback"]["type"] == "success"
        assert len(client.get("/plans/plan-2026-draft").json()["categories"]) == 2

    def test_editor_validation_error(self, client: TestClient) -> None:
        state = client.get("/plans/plan-2026-draft/category-editor").json()
        state["add_form"] = {"label": "A", "owner": "B", "allocated": "100", "utilized": "200", "notes": ""}

        response = client.post(
            "/plans/plan-2026-draft/category-editor",
            json={"state": state, "action": {"type": "add_category"}},
        )

        assert response.status_code == 200
        assert response.json()["feedback"]["type"] == "error"
        assert response.json()["feedback"]["error"] == "validation_failed"
        assert len(response.json()["categories"]) == 2

    def test_editor_refuses_non_draft_plan(self, client: TestClient) -> None:
        state = client.get("/plans/plan-2025/category-editor").json()

        response = client.post(
            "/plans/plan-2025/category-editor",
            json={"state": state, "action": {"type": "clear_feedback"}},
        )

        assert response.status_code == 409

    def test_unknown_action_type(self, client: TestClient) -> None:
        state = client.get("/plans/plan-2026-draft/category-editor").json()

        response = client.post(
            "/plans/plan-2026-draft/category-editor",
            json={"state": state, "action": {"type": "explode"}},
        )

        assert response.status_code == 422


class TestSqlBackend:
    def test_seeded_reservations_served_from_sql(self, settings_env) -> None:
        settings_env.setenv("STORAGE_BACKEND", "sql")
        get_settings.cache_clear()
        from restapi.router import create_app

        client = TestClient(create_app())

        assert [r["id"] for r in client.get("/reservations").json()] == ["res-001", "res-002", "res-003"]
        response = client.post("/reservations/res-001/cancel", json={"reason": "Reporté"})
        assert response.status_code == 200
        assert client.get("/reservations?status=cancelled").json()[0]["id"] == "res-001"
