"""Shapes the upstream bookings API is known to send.

The upstream schema has drifted over time: listings arrive as a bare array or
wrapped under ``bookings`` / ``data``, and dates arrive as plain strings,
epoch milliseconds, or legacy ``{"$date": ...}`` wrappers. Each variant is a
small matcher object; supporting a new shape means appending a matcher to the
relevant tuple, not editing the existing ones.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time
from email.utils import parsedate_to_datetime
from typing import Any, List, Mapping, Optional, Sequence

from src.shared.time import to_local_naive

RawBookingRecord = Mapping[str, Any]


class EnvelopeShape:
    name = "unknown"

    def unwrap(self, payload: Any) -> Optional[List[Any]]:
        raise NotImplementedError


class BareArrayEnvelope(EnvelopeShape):
    name = "bare_array"

    def unwrap(self, payload: Any) -> Optional[List[Any]]:
        if isinstance(payload, list):
            return payload
        return None


class KeyedEnvelope(EnvelopeShape):
    def __init__(self, key: str) -> None:
        self.key = key
        self.name = f"{key}_field"

    def unwrap(self, payload: Any) -> Optional[List[Any]]:
        if isinstance(payload, Mapping):
            value = payload.get(self.key)
            if isinstance(value, list):
                return value
        return None


ENVELOPE_SHAPES: Sequence[EnvelopeShape] = (
    BareArrayEnvelope(),
    KeyedEnvelope("bookings"),
    KeyedEnvelope("data"),
)


def match_envelope(payload: Any, shapes: Sequence[EnvelopeShape] = ENVELOPE_SHAPES) -> Optional[EnvelopeShape]:
    for shape in shapes:
        if shape.unwrap(payload) is not None:
            return shape
    return None


def unwrap_envelope(payload: Any, shapes: Sequence[EnvelopeShape] = ENVELOPE_SHAPES) -> List[Any]:
    """Bare list of records, or an empty list for any unrecognised payload."""
    for shape in shapes:
        records = shape.unwrap(payload)
        if records is not None:
            return records
    return []


def _local(value: datetime) -> Optional[datetime]:
    # Offsets can push an instant near year 1 or 9999 out of range.
    try:
        return to_local_naive(value)
    except (OverflowError, ValueError):
        return None


class DateShape:
    name = "unknown"

    def parse(self, value: Any) -> Optional[datetime]:
        raise NotImplementedError


class DateTimeValue(DateShape):
    name = "datetime"

    def parse(self, value: Any) -> Optional[datetime]:
        if isinstance(value, datetime):
            return _local(value)
        if isinstance(value, date):
            return datetime.combine(value, time())
        return None


class EpochMillisValue(DateShape):
    name = "epoch_millis"

    def parse(self, value: Any) -> Optional[datetime]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None


class IsoStringValue(DateShape):
    name = "iso_string"

    def parse(self, value: Any) -> Optional[datetime]:
        if not isinstance(value, str) or not value.strip():
            return None
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
        return _local(parsed)


class HttpDateStringValue(DateShape):
    """RFC 1123 strings such as ``Mon, 01 Jan 2024 00:00:00 GMT``."""

    name = "http_date_string"

    def parse(self, value: Any) -> Optional[datetime]:
        if not isinstance(value, str) or not value.strip():
            return None
        try:
            parsed = parsedate_to_datetime(value.strip())
        except (TypeError, ValueError, IndexError):
            return None
        if parsed is None:
            return None
        return _local(parsed)


PLAIN_DATE_SHAPES: Sequence[DateShape] = (
    DateTimeValue(),
    EpochMillisValue(),
    IsoStringValue(),
    HttpDateStringValue(),
)

def unwrap_date_value(value: Any) -> Any:
    """Strip ``{"$date": ...}`` wrappers; anything else passes through."""
    if not isinstance(value, Mapping):
        return value
    if "$date" in value:
        return unwrap_date_value(value["$date"])
    if "$numberLong" in value:
        # Canonical extended JSON nests epoch millis as a string.
        try:
            return int(value["$numberLong"])
        except (TypeError, ValueError):
            return None
    return None


def parse_date_value(value: Any, shapes: Sequence[DateShape] = PLAIN_DATE_SHAPES) -> Optional[datetime]:
    """Parse one date field into a naive local datetime, or ``None``."""
    if value is None:
        return None
    plain = unwrap_date_value(value)
    if plain is None:
        return None
    for shape in shapes:
        parsed = shape.parse(plain)
        if parsed is not None:
            return parsed
    return None


def extract_identifier(record: RawBookingRecord) -> str:
    value = record.get("id")
    if value in (None, ""):
        value = record.get("_id")
        if isinstance(value, Mapping):
            value = value.get("$oid")
    if value in (None, ""):
        return ""
    return str(value)
