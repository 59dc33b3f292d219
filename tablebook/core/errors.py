"""
Domain errors for the availability and booking engine.

Every failure the engine can report is a subclass of ``ReservationError``
carrying the HTTP status and machine-readable code the API renders, so
routes stay thin and never translate errors by hand.
"""
from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

# HTTP status codes for known error categories
STATUS_BAD_REQUEST = 400
STATUS_PAYMENT_REQUIRED = 402
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409


class ReservationError(Exception):
    """Base class for engine failures"""

    status_code: int = STATUS_BAD_REQUEST
    code: str = "reservation_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTimeFormat(ReservationError):
    """Time string is neither HH:MM nor H:MM AM/PM"""

    code = "invalid_time_format"


class InvalidRange(ReservationError):
    """Block end is not after block start"""

    code = "invalid_range"


class InvalidRequest(ReservationError):
    """Request failed a business rule (past date, table too small, duplicate table number)"""

    code = "invalid_request"


class NotFound(ReservationError):
    """Unknown restaurant, table, reservation, block or waitlist id"""

    status_code = STATUS_NOT_FOUND
    code = "not_found"

    def __init__(self, kind: str, identifier):
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class NoAvailability(ReservationError):
    """No table can take the party; callers may offer the waitlist"""

    status_code = STATUS_CONFLICT
    code = "no_availability"


class InvalidStateTransition(ReservationError):
    """Reservation status change not allowed by the state machine"""

    status_code = STATUS_CONFLICT
    code = "invalid_state_transition"

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot move reservation from {current} to {requested}")
        self.current = current
        self.requested = requested


class PaymentDeclined(ReservationError):
    """Payment step refused the charge; not retried by the engine"""

    status_code = STATUS_PAYMENT_REQUIRED
    code = "payment_declined"


async def reservation_error_handler(request: Request, exc: ReservationError) -> JSONResponse:
    """Render a ReservationError as a JSON error body."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.code},
    )
