from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class AppError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Session expired. Please login again.") -> None:
        super().__init__(code="unauthorized", message=message, status_code=401)


class UpstreamError(AppError):
    """The bookings API could not be reached or answered with an error.

    Kept separate from an empty result so callers can tell "no bookings"
    apart from "bookings unavailable".
    """

    def __init__(self, message: str = "Bookings service unavailable", upstream_status: Optional[int] = None) -> None:
        details = {"upstreamStatus": upstream_status} if upstream_status is not None else None
        super().__init__(code="upstream_error", message=message, status_code=502, details=details)
        self.upstream_status = upstream_status


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    envelope = ErrorEnvelope(error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details))
    return JSONResponse(status_code=exc.status_code, content=envelope.model_dump())


def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    envelope = ErrorEnvelope(
        error=ErrorDetail(
            code="validation_error",
            message="Validation error",
            details={"errors": exc.errors()},
        )
    )
    return JSONResponse(status_code=422, content=envelope.model_dump())
