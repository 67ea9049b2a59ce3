from __future__ import annotations

import os
import time
from datetime import datetime
from typing import Any, List, Optional

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_bookings_service
from src.main import create_app
from src.services.bookings_service import BookingsService

REFERENCE_NOW = datetime(2024, 1, 5, 10, 0, 0)

SAMPLE_PAYLOAD = {
    "bookings": [
        {
            "id": "b-1",
            "name": "Serengeti Migration",
            "date_from": "2024-01-01",
            "date_to": "2024-01-10",
            "country": "Tanzania",
            "pax": 4,
            "agent_name": "Savannah Tours",
            "agent_country": "Kenya",
            "created_by": "amina",
        },
        {
            "_id": {"$oid": "abc"},
            "name": "Ngorongoro Day Trip",
            "date_from": {"$date": "2024-01-05T18:00:00"},
            "date_to": {"$date": "2024-01-06T08:00:00"},
            "country": "Tanzania",
        },
        {
            "id": "b-3",
            "name": "Okavango Delta",
            "date_from": "2024-02-19",
            "date_to": "2024-02-26",
            "country": "Botswana",
            "pax": 2,
        },
        {
            "id": "b-4",
            "name": "Masai Mara",
            "date_from": "2024-01-15",
            "date_to": "2024-01-22",
            "country": "Kenya",
            "pax": 6,
        },
        {"id": "b-5", "name": "Broken", "date_from": "not a date", "date_to": "2024-01-22"},
        {"id": "b-6", "name": "Open ended", "date_from": "2024-01-20"},
        {"id": "b-7", "name": "Last year", "date_from": "2023-12-01", "date_to": "2023-12-05"},
    ]
}


class StubBookingsRepository:
    def __init__(self, payload: Any = None, error: Optional[Exception] = None) -> None:
        self.payload = payload
        self.error = error
        self.tokens: List[Optional[str]] = []

    def fetch_raw_bookings(self, token: Optional[str] = None) -> Any:
        self.tokens.append(token)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture()
def repository() -> StubBookingsRepository:
    return StubBookingsRepository(SAMPLE_PAYLOAD)


@pytest.fixture()
def service(repository: StubBookingsRepository) -> BookingsService:
    return BookingsService(repository=repository, clock=lambda: REFERENCE_NOW)


@pytest.fixture()
def client(service: BookingsService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_bookings_service] = lambda: service
    return TestClient(app)


@pytest.fixture()
def eastern_time():
    """Run under US Eastern time; clocks spring forward on 2024-03-10."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "EST5EDT,M3.2.0,M11.1.0"
    time.tzset()
    yield
    if previous is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = previous
    time.tzset()
