"""Tests for athlete lifecycle endpoints."""

from fastapi.testclient import TestClient

from wvruns.dao import AthleteDAO


class TestBulkTransitions:
    """Tests for advance and graduate."""

    def test_graduate(self, client: TestClient, store, roster):
        response = client.post("/api/v1/athletes/graduate", json={"reference_date": "2025-05-20"})
        assert response.status_code == 200, response.text

        body = response.json()
        assert body["count"] == 1
        assert body["affected"] == ["Amy Cole"]
        assert body["academic_year"] == 2025

        amy = AthleteDAO(store).get_by_slug("amy-2025")
        assert amy.status == "graduated"
        assert amy.graduation_year == 2024

    def test_advance(self, client: TestClient, store, roster):
        response = client.post("/api/v1/athletes/advance", json={"reference_date": "2025-05-20"})

        assert response.status_code == 200
        assert response.json()["count"] == 4
        assert AthleteDAO(store).get_by_slug("dan-2028").graduation_year == 2027

    def test_advance_with_guard(self, client: TestClient, store, roster):
        body = {"reference_date": "2025-05-20", "skip_already_advanced": True}
        client.post("/api/v1/athletes/advance", json=body)
        response = client.post("/api/v1/athletes/advance", json=body)

        assert response.json()["count"] == 0
        assert AthleteDAO(store).get_by_slug("dan-2028").graduation_year == 2027


class TestAthleteStatus:
    """Tests for reading lifecycle standing."""

    def test_senior(self, client: TestClient, roster):
        response = client.get("/api/v1/athletes/amy-2025/status?reference_date=2025-05-20")
        assert response.status_code == 200

        body = response.json()
        assert body["athlete"]["name"] == "Amy Cole"
        assert body["standing"] == {
            "state": "senior",
            "graduating_year": 2025,
            "days_until_graduation": 12,
        }

    def test_active(self, client: TestClient, roster):
        response = client.get("/api/v1/athletes/dan-2028/status?reference_date=2025-05-20")

        assert response.json()["standing"]["state"] == "active"
        assert response.json()["standing"]["grade"] == "Rising Sophomore"

    def test_not_found(self, client: TestClient):
        response = client.get("/api/v1/athletes/nobody/status")

        assert response.status_code == 404
        assert response.json()["reason"] == "AthleteNotFound"

    def test_roster(self, client: TestClient, roster):
        response = client.get("/api/v1/athletes/roster?reference_date=2025-05-20")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 4
        assert body["by_state"] == {"senior": 1, "active": 3}


class TestGraduationYear:
    """Tests for PATCH /athletes/{slug}/graduation-year."""

    def test_correct(self, client: TestClient, store, roster):
        response = client.patch(
            "/api/v1/athletes/amy-2025/graduation-year", json={"graduation_year": 2026}
        )

        assert response.status_code == 200
        assert response.json()["graduation_year"] == 2026
        assert AthleteDAO(store).get_by_slug("amy-2025").graduation_year == 2026

    def test_unknown(self, client: TestClient):
        response = client.patch(
            "/api/v1/athletes/nobody/graduation-year", json={"graduation_year": 2026}
        )
        assert response.status_code == 404

    def test_invalid_year(self, client: TestClient, roster):
        response = client.patch(
            "/api/v1/athletes/amy-2025/graduation-year", json={"graduation_year": "soon"}
        )
        assert response.status_code == 422
