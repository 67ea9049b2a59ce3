from __future__ import annotations

from src.core.errors import UnauthorizedError, UpstreamError


def test_ongoing_bookings(client):
    response = client.get("/api/v1/bookings/ongoing")
    assert response.status_code == 200
    payload = response.json()
    assert [row["id"] for row in payload["data"]] == ["b-1", "abc"]
    first = payload["data"][0]
    assert first["agentName"] == "Savannah Tours"
    assert first["daysRemaining"] == 5
    assert first["remainingLabel"] == "5 days remaining"
    assert payload["data"][1]["agentName"] == "Unknown Agent"
    assert payload["data"][1]["remainingLabel"] == "1 day remaining"
    assert payload["pagination"]["totalItems"] == 2
    assert payload["pagination"]["totalPages"] == 1
    assert payload["meta"]["skippedRecords"] == 2
    assert payload["meta"]["referenceTime"] == "2024-01-05T10:00:00"


def test_upcoming_bookings_sorted_with_display_hints(client):
    response = client.get("/api/v1/bookings/upcoming")
    assert response.status_code == 200
    payload = response.json()
    rows = payload["data"]
    assert [row["id"] for row in rows] == ["b-4", "b-3"]
    assert rows[0]["daysUntilStart"] == 10
    assert rows[0]["duration"] == 7
    assert rows[0]["status"] == "upcoming"
    assert rows[0]["urgency"] == "scheduled"
    assert rows[0]["startsInLabel"] == "In 2 weeks"
    assert rows[0]["durationLabel"] == "7 days"
    assert rows[1]["daysUntilStart"] == 45
    assert rows[1]["status"] == "confirmed"
    assert rows[1]["startsInLabel"] == "In 2 months"


def test_upcoming_bookings_second_page(client):
    response = client.get("/api/v1/bookings/upcoming?page=2&limit=1")
    assert response.status_code == 200
    payload = response.json()
    assert [row["id"] for row in payload["data"]] == ["b-3"]
    pagination = payload["pagination"]
    assert pagination["page"] == 2
    assert pagination["pageSize"] == 1
    assert pagination["offset"] == 1
    assert pagination["hasPrev"] is True
    assert pagination["hasNext"] is False


def test_page_past_the_end_is_clamped(client):
    response = client.get("/api/v1/bookings/upcoming?page=99&limit=1")
    assert response.status_code == 200
    payload = response.json()
    assert payload["pagination"]["page"] == 2
    assert [row["id"] for row in payload["data"]] == ["b-3"]


def test_limit_above_maximum_is_rejected(client):
    response = client.get("/api/v1/bookings/ongoing?limit=101")
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "validation_error"


def test_classification_summary(client):
    response = client.get("/api/v1/bookings/classification")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalRecords"] == 7
    assert data["ongoingCount"] == 2
    assert data["upcomingCount"] == 2
    assert data["confirmedCount"] == 1
    assert data["skippedCount"] == 2
    assert [(item["recordId"], item["reason"]) for item in data["skipped"]] == [
        ("b-5", "invalid_date_from"),
        ("b-6", "missing_date_to"),
    ]


def test_bearer_token_is_forwarded(client, repository):
    response = client.get("/api/v1/bookings/ongoing", headers={"Authorization": "Bearer secret-token"})
    assert response.status_code == 200
    assert repository.tokens == ["secret-token"]


def test_unknown_envelope_yields_empty_page(client, repository):
    repository.payload = {"results": [{"id": "x"}]}
    response = client.get("/api/v1/bookings/upcoming")
    assert response.status_code == 200
    payload = response.json()
    assert payload["data"] == []
    assert payload["pagination"]["totalPages"] == 1
    assert payload["pagination"]["hasNext"] is False


def test_upstream_failure_is_distinct_from_empty_result(client, repository):
    repository.error = UpstreamError("Failed to fetch bookings: 503", upstream_status=503)
    response = client.get("/api/v1/bookings/ongoing")
    assert response.status_code == 502
    error = response.json()["error"]
    assert error["code"] == "upstream_error"
    assert error["details"] == {"upstreamStatus": 503}


def test_upstream_unauthorized(client, repository):
    repository.error = UnauthorizedError()
    response = client.get("/api/v1/bookings/upcoming")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "unauthorized"
