from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_bookings_service, get_upstream_token
from src.schemas.bookings import (
    BookingListFilters,
    ClassificationResult,
    ClassificationSummary,
    OngoingBookingView,
    UpcomingBookingView,
)
from src.services.bookings_service import BookingsService
from src.shared.response import Meta, ResponseEnvelope, build_pagination


router = APIRouter(prefix="/bookings", tags=["bookings"])

BOOKINGS_SOURCE = "bookings_api"
CALCULATION_VERSION = "v1"


def get_booking_list_filters(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
) -> BookingListFilters:
    return BookingListFilters(page=page, limit=limit)


def _meta(result: ClassificationResult, time_window: str) -> Meta:
    return Meta(
        as_of_date=date.today().isoformat(),
        source=BOOKINGS_SOURCE,
        time_window=time_window,
        calculation_version=CALCULATION_VERSION,
        reference_time=result.reference_time.isoformat(),
        skipped_records=len(result.skipped),
    )


@router.get("/ongoing")
def ongoing_bookings(
    filters: BookingListFilters = Depends(get_booking_list_filters),
    token: Optional[str] = Depends(get_upstream_token),
    service: BookingsService = Depends(get_bookings_service),
) -> ResponseEnvelope[List[OngoingBookingView]]:
    rows, controller, result = service.list_ongoing(page=filters.page, limit=filters.limit, token=token)
    return ResponseEnvelope(data=rows, pagination=build_pagination(controller), meta=_meta(result, "ongoing"))


@router.get("/upcoming")
def upcoming_bookings(
    filters: BookingListFilters = Depends(get_booking_list_filters),
    token: Optional[str] = Depends(get_upstream_token),
    service: BookingsService = Depends(get_bookings_service),
) -> ResponseEnvelope[List[UpcomingBookingView]]:
    rows, controller, result = service.list_upcoming(page=filters.page, limit=filters.limit, token=token)
    return ResponseEnvelope(data=rows, pagination=build_pagination(controller), meta=_meta(result, "upcoming"))


@router.get("/classification")
def bookings_classification(
    token: Optional[str] = Depends(get_upstream_token),
    service: BookingsService = Depends(get_bookings_service),
) -> ResponseEnvelope[ClassificationSummary]:
    summary = service.get_summary(token=token)
    meta = Meta(
        as_of_date=date.today().isoformat(),
        source=BOOKINGS_SOURCE,
        time_window="now",
        calculation_version=CALCULATION_VERSION,
        reference_time=summary.reference_time.isoformat(),
        skipped_records=summary.skipped_count,
    )
    return ResponseEnvelope(data=summary, pagination=None, meta=meta)
