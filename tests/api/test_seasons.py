"""Tests for season endpoints."""

from fastapi.testclient import TestClient

CURRENT = {"year": 2025, "start_month": 7, "end_month": 10}


class TestCurrentSeason:
    def test_none_set(self, client: TestClient):
        assert client.get("/api/v1/seasons/current").status_code == 404

    def test_set_and_get(self, client: TestClient):
        response = client.put("/api/v1/seasons/current", json=CURRENT)
        assert response.status_code == 200

        response = client.get("/api/v1/seasons/current")
        assert response.json() == CURRENT

    def test_month_out_of_range(self, client: TestClient):
        response = client.put("/api/v1/seasons/current", json={**CURRENT, "end_month": 12})
        assert response.status_code == 422


class TestArchive:
    def test_archive_without_current(self, client: TestClient):
        response = client.post("/api/v1/seasons/2025/archive")
        assert response.status_code == 409

    def test_archive_once(self, client: TestClient):
        client.put("/api/v1/seasons/current", json=CURRENT)

        response = client.post("/api/v1/seasons/2025/archive")
        assert response.status_code == 201
        assert response.json()["year"] == 2025
        assert response.json()["archived_at"]

        response = client.post("/api/v1/seasons/2025/archive")
        assert response.status_code == 409
        assert "already archived" in response.json()["detail"]

    def test_list_archived(self, client: TestClient):
        client.put("/api/v1/seasons/current", json=CURRENT)
        client.post("/api/v1/seasons/2024/archive")
        client.post("/api/v1/seasons/2025/archive")

        response = client.get("/api/v1/seasons/archived")
        assert [s["year"] for s in response.json()] == [2025, 2024]


class TestSeasonData:
    def test_season_data(self, client: TestClient):
        client.post(
            "/api/v1/meets/state-2024/results/import",
            json={
                "meet_name": "WV State",
                "meet_date": "2024-11-02",
                "csv": "h\nJohn Smith,morgantown,M,18:30.45,5000,1",
            },
        )

        response = client.get("/api/v1/seasons/2024")
        assert response.status_code == 200

        body = response.json()
        assert body["meet_count"] == 1
        assert body["result_count"] == 1
        assert body["athlete_count"] == 0
        assert body["meets"][0]["slug"] == "state-2024"
