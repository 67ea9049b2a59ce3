from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Header

from src.repositories.bookings_repository import BookingsRepository
from src.services.bookings_service import BookingsService


@lru_cache
def get_bookings_repository() -> BookingsRepository:
    return BookingsRepository()


def get_bookings_service() -> BookingsService:
    return BookingsService(repository=get_bookings_repository())


def get_upstream_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
