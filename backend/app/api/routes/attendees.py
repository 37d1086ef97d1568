import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.api.deps import get_attendee_list_service
from app.core.config import settings
from app.core.exceptions import DataAccessError
from app.schemas import ErrorResponse
from app.services.attendee_list import AttendeeListService

router = APIRouter()
logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, error: Exception) -> JSONResponse:
    """Error body; the raw message is only exposed outside production"""
    body = ErrorResponse(
        error=message,
        details=None if settings.is_production else (str(error) or type(error).__name__),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.get("/attendees-list")
def attendees_list(
    on_date: Optional[date] = Query(default=None, alias="date", description="Calendar day (YYYY-MM-DD) in the event time zone"),
    service: AttendeeListService = Depends(get_attendee_list_service),
):
    """
    Attendees and seat assignments for the host's events.
    Optional: ?date=2025-11-12 to restrict to one day.
    """
    try:
        response = service.get_attendees(on_date)
        return response.to_payload()

    except DataAccessError as e:
        logger.error(f"Attendees list: database unreachable: {e}", exc_info=True)
        return error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Database connection failed. Please check your credentials and try again.",
            e,
        )
    except Exception as e:
        logger.error(f"Attendees list error: {e}", exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch attendees list",
            e,
        )
