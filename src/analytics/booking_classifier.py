from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from src.models.bookings import extract_identifier, parse_date_value, unwrap_envelope
from src.schemas.bookings import (
    ClassificationResult,
    NormalizedBooking,
    OngoingBooking,
    SkippedRecord,
    UpcomingBooking,
)
from src.shared.time import calendar_date, elapsed_days, local_now, to_local_naive

logger = logging.getLogger(__name__)

CONFIRMED_THRESHOLD_DAYS = 30


def _text(value: Any, default: Optional[str] = None) -> Optional[str]:
    if value is None or value == "":
        return default
    return str(value)


def _coerce_pax(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        count = value
    elif isinstance(value, float) and math.isfinite(value):
        count = int(value)
    elif isinstance(value, str):
        try:
            count = int(value.strip())
        except ValueError:
            return 0
    else:
        return 0
    return max(count, 0)


def _normalize(record: Any, index: int) -> Tuple[Optional[NormalizedBooking], Optional[SkippedRecord]]:
    if not isinstance(record, Mapping):
        return None, SkippedRecord(index=index, reason="not_a_mapping")

    record_id = extract_identifier(record)
    for field in ("date_from", "date_to"):
        if record.get(field) is None:
            return None, SkippedRecord(index=index, record_id=record_id or None, reason=f"missing_{field}")
    date_from = parse_date_value(record.get("date_from"))
    if date_from is None:
        return None, SkippedRecord(index=index, record_id=record_id or None, reason="invalid_date_from")
    date_to = parse_date_value(record.get("date_to"))
    if date_to is None:
        return None, SkippedRecord(index=index, record_id=record_id or None, reason="invalid_date_to")

    booking = NormalizedBooking(
        id=record_id,
        name=_text(record.get("name")),
        date_from=date_from,
        date_to=date_to,
        country=_text(record.get("country")),
        pax=_coerce_pax(record.get("pax")),
        agent_name=_text(record.get("agent_name"), "Unknown Agent"),
        agent_country=_text(record.get("agent_country"), "Unknown"),
        created_by=_text(record.get("created_by"), "Unknown User"),
    )
    return booking, None


def normalize_booking(record: Any) -> Optional[NormalizedBooking]:
    """Normalize one raw record; ``None`` when either date is unusable."""
    booking, _ = _normalize(record, 0)
    return booking


def normalize_bookings(payload: Any) -> Tuple[List[NormalizedBooking], List[SkippedRecord]]:
    bookings: List[NormalizedBooking] = []
    skipped: List[SkippedRecord] = []
    for index, record in enumerate(unwrap_envelope(payload)):
        booking, skip = _normalize(record, index)
        if booking is not None:
            bookings.append(booking)
        elif skip is not None:
            logger.debug("skipping booking record index=%s id=%s reason=%s", index, skip.record_id, skip.reason)
            skipped.append(skip)
    return bookings, skipped


def _reference_time(now: Optional[datetime]) -> datetime:
    return to_local_naive(now) if now is not None else local_now()


def is_ongoing(booking: NormalizedBooking, today: date) -> bool:
    return booking.date_from.date() <= today <= booking.date_to.date()


def is_upcoming(booking: NormalizedBooking, today: date) -> bool:
    return booking.date_from.date() > today


def build_upcoming(
    booking: NormalizedBooking,
    now: datetime,
    confirmed_threshold_days: int = CONFIRMED_THRESHOLD_DAYS,
) -> UpcomingBooking:
    # Days until start are measured from the exact instant, not from midnight.
    days_until_start = elapsed_days(booking.date_from, now)
    return UpcomingBooking(
        **booking.model_dump(),
        days_until_start=days_until_start,
        duration=elapsed_days(booking.date_to, booking.date_from),
        status="confirmed" if days_until_start > confirmed_threshold_days else "upcoming",
    )


def _ongoing_from(bookings: Iterable[NormalizedBooking], now: datetime) -> List[OngoingBooking]:
    today = calendar_date(now)
    return [OngoingBooking(**booking.model_dump()) for booking in bookings if is_ongoing(booking, today)]


def _upcoming_from(
    bookings: Iterable[NormalizedBooking],
    now: datetime,
    confirmed_threshold_days: int,
) -> List[UpcomingBooking]:
    today = calendar_date(now)
    upcoming = [
        build_upcoming(booking, now, confirmed_threshold_days) for booking in bookings if is_upcoming(booking, today)
    ]
    return sorted(upcoming, key=lambda item: item.days_until_start)


def classify_ongoing(payload: Any, now: Optional[datetime] = None) -> List[OngoingBooking]:
    bookings, _ = normalize_bookings(payload)
    return _ongoing_from(bookings, _reference_time(now))


def classify_upcoming(
    payload: Any,
    now: Optional[datetime] = None,
    confirmed_threshold_days: int = CONFIRMED_THRESHOLD_DAYS,
) -> List[UpcomingBooking]:
    bookings, _ = normalize_bookings(payload)
    return _upcoming_from(bookings, _reference_time(now), confirmed_threshold_days)


def classify_bookings(
    payload: Any,
    now: Optional[datetime] = None,
    confirmed_threshold_days: int = CONFIRMED_THRESHOLD_DAYS,
) -> ClassificationResult:
    """Split a raw bookings payload into ongoing and upcoming collections.

    ``now`` is read once and shared by both collections. Records that cannot
    be normalized are left out of both and listed in ``skipped``.
    """
    reference = _reference_time(now)
    bookings, skipped = normalize_bookings(payload)
    result = ClassificationResult(
        reference_time=reference,
        total_records=len(bookings) + len(skipped),
        ongoing=_ongoing_from(bookings, reference),
        upcoming=_upcoming_from(bookings, reference, confirmed_threshold_days),
        skipped=skipped,
    )
    logger.debug(
        "classified bookings total=%s ongoing=%s upcoming=%s skipped=%s",
        result.total_records,
        len(result.ongoing),
        len(result.upcoming),
        len(result.skipped),
    )
    return result
