from __future__ import annotations

import math
from datetime import datetime

from src.schemas.bookings import (
    NormalizedBooking,
    OngoingBooking,
    OngoingBookingView,
    UpcomingBooking,
    UpcomingBookingView,
    Urgency,
)
from src.shared.time import elapsed_days


def urgency(days_until_start: int) -> Urgency:
    if days_until_start <= 3:
        return "starting_soon"
    if days_until_start <= 7:
        return "this_week"
    return "scheduled"


def starts_in_label(days_until_start: int) -> str:
    if days_until_start <= 0:
        return "Today"
    if days_until_start == 1:
        return "Tomorrow"
    if days_until_start <= 7:
        return f"In {days_until_start} days"
    if days_until_start <= 30:
        return f"In {math.ceil(days_until_start / 7)} weeks"
    return f"In {math.ceil(days_until_start / 30)} months"


def duration_label(days: int) -> str:
    if days == 1:
        return "1 day"
    return f"{days} days"


def days_remaining(booking: NormalizedBooking, now: datetime) -> int:
    return elapsed_days(booking.date_to, now)


def remaining_label(days: int) -> str:
    if days <= 0:
        return "Ending today"
    if days == 1:
        return "1 day remaining"
    if days <= 7:
        return f"{days} days remaining"
    if days <= 30:
        return f"{math.ceil(days / 7)} weeks remaining"
    return f"{math.ceil(days / 30)} months remaining"


def describe_ongoing(booking: OngoingBooking, now: datetime) -> OngoingBookingView:
    remaining = days_remaining(booking, now)
    return OngoingBookingView(
        **booking.model_dump(),
        days_remaining=remaining,
        remaining_label=remaining_label(remaining),
    )


def describe_upcoming(booking: UpcomingBooking) -> UpcomingBookingView:
    return UpcomingBookingView(
        **booking.model_dump(),
        urgency=urgency(booking.days_until_start),
        starts_in_label=starts_in_label(booking.days_until_start),
        duration_label=duration_label(booking.duration),
    )
