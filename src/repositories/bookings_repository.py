from __future__ import annotations

from typing import Any, Optional

from src.core.bookings_client import BookingsApiClient


class BookingsRepository:
    def __init__(self, client: Optional[BookingsApiClient] = None) -> None:
        self.client = client or BookingsApiClient()

    def fetch_raw_bookings(self, token: Optional[str] = None) -> Any:
        return self.client.fetch_bookings(token=token)
