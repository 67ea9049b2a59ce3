from __future__ import annotations

from datetime import datetime

from src.services.bookings_service import BookingsService
from tests.conftest import REFERENCE_NOW, StubBookingsRepository


def _many_upcoming(count: int):
    return [
        {"id": f"u-{index}", "date_from": f"2024-03-{index + 1:02d}", "date_to": "2024-04-01"}
        for index in range(count)
    ]


def test_clock_is_read_once_per_request():
    calls = []

    def clock() -> datetime:
        calls.append(1)
        return REFERENCE_NOW

    service = BookingsService(repository=StubBookingsRepository(_many_upcoming(3)), clock=clock)
    service.list_upcoming()
    assert len(calls) == 1


def test_default_page_size_comes_from_settings():
    service = BookingsService(repository=StubBookingsRepository(_many_upcoming(25)), clock=lambda: REFERENCE_NOW)
    rows, controller, _ = service.list_upcoming()
    assert controller.limit == 20
    assert len(rows) == 20
    assert controller.total_pages == 2


def test_explicit_page_and_limit():
    service = BookingsService(repository=StubBookingsRepository(_many_upcoming(25)), clock=lambda: REFERENCE_NOW)
    rows, controller, result = service.list_upcoming(page=3, limit=10)
    assert controller.page == 3
    assert [row.id for row in rows] == ["u-20", "u-21", "u-22", "u-23", "u-24"]
    assert len(result.upcoming) == 25


def test_summary_counts(service):
    summary = service.get_summary()
    assert summary.total_records == 7
    assert summary.ongoing_count == 2
    assert summary.upcoming_count == 2
    assert summary.confirmed_count == 1
    assert summary.skipped_count == 2
