from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional, Tuple

from src.analytics.booking_classifier import classify_bookings
from src.analytics.booking_labels import describe_ongoing, describe_upcoming
from src.core.config import get_settings
from src.repositories.bookings_repository import BookingsRepository
from src.schemas.bookings import (
    ClassificationResult,
    ClassificationSummary,
    OngoingBookingView,
    UpcomingBookingView,
)
from src.shared.pagination import PaginationController
from src.shared.time import local_now


class BookingsService:
    def __init__(
        self,
        repository: BookingsRepository,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.repository = repository
        self.clock = clock
        self.settings = get_settings()

    def classify(self, token: Optional[str] = None) -> ClassificationResult:
        payload = self.repository.fetch_raw_bookings(token=token)
        return classify_bookings(
            payload,
            now=self.clock(),
            confirmed_threshold_days=self.settings.confirmed_threshold_days,
        )

    def _controller(self, page: int, limit: Optional[int], total: int) -> PaginationController:
        controller = PaginationController(
            initial_limit=limit or self.settings.default_page_size,
            total_items=total,
        )
        controller.set_page(page)
        return controller

    def list_ongoing(
        self,
        page: int = 1,
        limit: Optional[int] = None,
        token: Optional[str] = None,
    ) -> Tuple[List[OngoingBookingView], PaginationController, ClassificationResult]:
        result = self.classify(token)
        controller = self._controller(page, limit, len(result.ongoing))
        rows = [describe_ongoing(booking, result.reference_time) for booking in controller.slice(result.ongoing)]
        return rows, controller, result

    def list_upcoming(
        self,
        page: int = 1,
        limit: Optional[int] = None,
        token: Optional[str] = None,
    ) -> Tuple[List[UpcomingBookingView], PaginationController, ClassificationResult]:
        result = self.classify(token)
        controller = self._controller(page, limit, len(result.upcoming))
        rows = [describe_upcoming(booking) for booking in controller.slice(result.upcoming)]
        return rows, controller, result

    def get_summary(self, token: Optional[str] = None) -> ClassificationSummary:
        result = self.classify(token)
        return ClassificationSummary(
            reference_time=result.reference_time,
            total_records=result.total_records,
            ongoing_count=len(result.ongoing),
            upcoming_count=len(result.upcoming),
            confirmed_count=sum(1 for booking in result.upcoming if booking.status == "confirmed"),
            skipped_count=len(result.skipped),
            skipped=result.skipped,
        )
