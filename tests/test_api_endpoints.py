from __future__ import annotations

import time

from fastapi.testclient import TestClient

from cadence.main import app
from cadence.services.units import DAY_MS, MONTH_MS


def test_api_health_and_request_id() -> None:
    with TestClient(app) as client:
        response = client.get("/api/health", headers={"X-Request-ID": "abc123"})
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert response.headers["X-Request-ID"] == "abc123"

        generated = client.get("/api/health")
        assert generated.headers["X-Request-ID"]


def test_api_interval_average() -> None:
    with TestClient(app) as client:
        response = client.post("/api/intervals/average", json={"interval": {"months": 2, "d": 1}})
        assert response.status_code == 200
        payload = response.json()
        assert payload["average_ms"] == 2 * MONTH_MS + DAY_MS
        assert payload["interval"]["months"] == 2
        assert payload["interval"]["days"] == 1
        assert payload["interval"]["years"] == 0

        bad_unit = client.post("/api/intervals/average", json={"interval": {"fortnights": 1}})
        assert bad_unit.status_code == 400
        assert "fortnights" in bad_unit.json()["detail"]

        negative = client.post("/api/intervals/average", json={"interval": {"days": -1}})
        assert negative.status_code == 400


def test_api_rule_queries() -> None:
    rule = {"start": "2000-03-01", "interval": {"months": 1}, "timezone": "UTC"}
    with TestClient(app) as client:
        occurrence = client.post("/api/rules/occurrence", json={**rule, "index": 4})
        assert occurrence.status_code == 200
        assert occurrence.json() == {"index": 4, "occurrence": "2000-07-01T00:00:00+00:00"}

        first = client.post("/api/rules/first", json={**rule, "count": 3})
        assert first.status_code == 200
        assert first.json() == {
            "count": 3,
            "occurrences": [
                "2000-03-01T00:00:00+00:00",
                "2000-04-01T00:00:00+00:00",
                "2000-05-01T00:00:00+00:00",
            ],
        }

        between = client.post(
            "/api/rules/between",
            json={"start": "2017-05-03", "interval": {"d": 7}, "timezone": "UTC", "from": "2117-05-05", "to": "2117-05-20"},
        )
        assert between.status_code == 200
        assert between.json()["occurrences"] == [
            "2117-05-05T00:00:00+00:00",
            "2117-05-12T00:00:00+00:00",
            "2117-05-19T00:00:00+00:00",
        ]


def test_api_uses_default_timezone(monkeypatch) -> None:
    monkeypatch.setenv("CADENCE_DEFAULT_TIMEZONE", "Asia/Tokyo")
    with TestClient(app) as client:
        response = client.post("/api/rules/occurrence", json={"start": "2000-01-01", "interval": {}, "index": 0})
        assert response.status_code == 200
        assert response.json()["occurrence"] == "2000-01-01T00:00:00+09:00"


def test_api_rule_validation_errors(monkeypatch) -> None:
    with TestClient(app) as client:
        bad_date = client.post(
            "/api/rules/occurrence",
            json={"start": "2000-02-31", "interval": {"months": 1}, "timezone": "UTC", "index": 0},
        )
        assert bad_date.status_code == 400

        bad_tz = client.post(
            "/api/rules/first",
            json={"start": "2000-01-01", "interval": {"months": 1}, "timezone": "Adventure/Time", "count": 1},
        )
        assert bad_tz.status_code == 400
        assert "Invalid timezone" in bad_tz.json()["detail"]

        negative_index = client.post(
            "/api/rules/occurrence",
            json={"start": "2000-01-01", "interval": {"months": 1}, "timezone": "UTC", "index": -1},
        )
        assert negative_index.status_code == 422

        bad_bound = client.post(
            "/api/rules/between",
            json={"start": "2000-01-01", "interval": {"days": 1}, "timezone": "UTC", "from": "soon", "to": "2000-02-01"},
        )
        assert bad_bound.status_code == 400

    monkeypatch.setenv("CADENCE_MAX_RESULTS", "3")
    with TestClient(app) as client:
        too_many = client.post(
            "/api/rules/first",
            json={"start": "2000-01-01", "interval": {"days": 1}, "timezone": "UTC", "count": 5},
        )
        assert too_many.status_code == 400

        wide_range = client.post(
            "/api/rules/between",
            json={"start": "2000-01-01", "interval": {"days": 1}, "timezone": "UTC", "from": "2000-01-01", "to": "2000-02-01"},
        )
        assert wide_range.status_code == 400
        assert "narrow" in wide_range.json()["detail"]


def test_api_between_cap_is_enforced_while_enumerating(monkeypatch) -> None:
    monkeypatch.setenv("CADENCE_MAX_RESULTS", "10")
    with TestClient(app) as client:
        started = time.perf_counter()
        response = client.post(
            "/api/rules/between",
            json={"start": "2000-01-01", "interval": {"s": 1}, "timezone": "UTC", "from": "2000-01-01", "to": "2000-01-20"},
        )
        elapsed = time.perf_counter() - started
    assert response.status_code == 400
    assert "narrow" in response.json()["detail"]
    assert elapsed < 5


def test_api_occurrence_past_supported_range() -> None:
    with TestClient(app) as client:
        response = client.post(
            "/api/rules/occurrence",
            json={"start": "2000-01-01", "interval": {"y": 1}, "timezone": "UTC", "index": 8000},
        )
        assert response.status_code == 400

        between = client.post(
            "/api/rules/between",
            json={"start": "2000-01-01", "interval": {"y": 1}, "timezone": "UTC", "from": "9998-06-01", "to": "9999-12-31"},
        )
        assert between.status_code == 200
        assert between.json()["occurrences"] == ["9999-01-01T00:00:00+00:00"]
