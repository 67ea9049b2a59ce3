from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from src.shared.base import BaseSchema

UpcomingStatus = Literal["upcoming", "confirmed"]
Urgency = Literal["starting_soon", "this_week", "scheduled"]


class NormalizedBooking(BaseSchema):
    id: str
    name: Optional[str] = None
    date_from: datetime
    date_to: datetime
    country: Optional[str] = None
    pax: int = Field(default=0, ge=0)
    agent_name: str = "Unknown Agent"
    agent_country: str = "Unknown"
    created_by: str = "Unknown User"


class OngoingBooking(NormalizedBooking):
    pass


class UpcomingBooking(NormalizedBooking):
    days_until_start: int = Field(..., ge=1)
    duration: int
    status: UpcomingStatus


class SkippedRecord(BaseSchema):
    index: int
    record_id: Optional[str] = None
    reason: str


class ClassificationResult(BaseSchema):
    reference_time: datetime
    total_records: int
    ongoing: List[OngoingBooking]
    upcoming: List[UpcomingBooking]
    skipped: List[SkippedRecord]


class OngoingBookingView(OngoingBooking):
    days_remaining: int
    remaining_label: str


class UpcomingBookingView(UpcomingBooking):
    urgency: Urgency
    starts_in_label: str
    duration_label: str


class ClassificationSummary(BaseSchema):
    reference_time: datetime
    total_records: int
    ongoing_count: int
    upcoming_count: int
    confirmed_count: int
    skipped_count: int
    skipped: List[SkippedRecord]


class BookingListFilters(BaseSchema):
    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1, le=100)
