from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.services.attendee_list import AttendeeListService
from app.services.attendee_repository import AttendeeRepository


def get_attendee_repository(db: Session = Depends(get_db)) -> AttendeeRepository:
    return AttendeeRepository(db, timezone=settings.EVENT_TIMEZONE)


def get_attendee_list_service(
    repository: AttendeeRepository = Depends(get_attendee_repository),
) -> AttendeeListService:
    """Dependency wiring the configured host and row cap into the service"""
    return AttendeeListService(repository, settings)
