import logging
from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy import Date, cast, func, select
from sqlalchemy.exc import DBAPIError, DisconnectionError
from sqlalchemy.orm import Session

from app.models.attendee import EventAttendee
from app.models.attendee_guest import AttendeeGuest
from app.models.event import Event
from app.schemas import EventSummary, RawAttendeeRow
from app.core.exceptions import translate_db_error

logger = logging.getLogger(__name__)


class AttendeeRepository:
    """
    Read-only queries against the events / attendees / seat tables.

    Driver errors are translated into DataAccessError or
    StatementTimeoutError; anything else is re-raised untouched.
    """

    def __init__(self, db: Session, timezone: str = "UTC"):
        self.db = db
        self.timezone = timezone

    def _execute(self, stmt):
        try:
            return self.db.execute(stmt).all()
        except (DBAPIError, DisconnectionError) as e:
            # A cancelled statement poisons the transaction; later tiers need a clean one
            self.db.rollback()
            translated = translate_db_error(e)
            logger.debug(f"Query failed as {type(translated).__name__}: {e}")
            if translated is e:
                raise
            raise translated from e

    def _local_start(self):
        # start_at is stored as UTC without a zone
        return func.timezone(self.timezone, func.timezone("UTC", Event.start_at))

    def find_events(
        self,
        host_user_id: int,
        include: str,
        exclude: str,
        on_date: Optional[date] = None,
    ) -> List[EventSummary]:
        """Host events matching the name filters with at least one active attendee, newest first"""
        attendee_count = func.count(EventAttendee.id)
        stmt = (
            select(
                Event.id,
                Event.name,
                Event.start_at,
                attendee_count.label("attendee_count"),
            )
            .join(EventAttendee, EventAttendee.event_id == Event.id)
            .where(
                Event.user_id == host_user_id,
                EventAttendee.deleted_at.is_(None),
                Event.name.ilike(f"%{include}%"),
                ~Event.name.ilike(f"%{exclude}%"),
            )
            .group_by(Event.id, Event.name, Event.start_at)
            .having(attendee_count > 0)
            .order_by(Event.start_at.desc().nulls_last())
        )
        if on_date is not None:
            stmt = stmt.where(cast(self._local_start(), Date) == on_date)

        return [EventSummary.model_validate(dict(row._mapping)) for row in self._execute(stmt)]

    def fetch_attendee_seats(self, event_ids: Sequence[int], limit: int) -> List[RawAttendeeRow]:
        """Attendees LEFT JOINed to their seat assignments; one row per pair"""
        stmt = (
            select(
                EventAttendee.id.label("attendee_id"),
                EventAttendee.event_id,
                EventAttendee.first_name,
                EventAttendee.last_name,
                AttendeeGuest.id.label("guest_id"),
                AttendeeGuest.seat_id,
                AttendeeGuest.seat_obj,
                AttendeeGuest.checkin_timestamp,
            )
            .select_from(EventAttendee)
            .outerjoin(AttendeeGuest, AttendeeGuest.event_attendee_id == EventAttendee.id)
            .where(
                EventAttendee.event_id.in_(list(event_ids)),
                EventAttendee.deleted_at.is_(None),
            )
            .order_by(
                EventAttendee.event_id.desc(),
                EventAttendee.id.desc(),
                AttendeeGuest.id.asc(),
            )
            .limit(limit)
        )
        return [RawAttendeeRow.model_validate(dict(row._mapping)) for row in self._execute(stmt)]

    def fetch_attendees(self, event_ids: Sequence[int], limit: int) -> List[RawAttendeeRow]:
        """Attendee identity only, no seat join"""
        stmt = (
            select(
                EventAttendee.id.label("attendee_id"),
                EventAttendee.event_id,
                EventAttendee.first_name,
                EventAttendee.last_name,
            )
            .where(
                EventAttendee.event_id.in_(list(event_ids)),
                EventAttendee.deleted_at.is_(None),
            )
            .order_by(EventAttendee.event_id.desc(), EventAttendee.id.desc())
            .limit(limit)
        )
        return [RawAttendeeRow.model_validate(dict(row._mapping)) for row in self._execute(stmt)]

    def event_local_date(self, event_id: int, on_date: date):
        """(id, name, start_at, local_date, matches) for a single event, or None"""
        local_date = cast(self._local_start(), Date)
        stmt = select(
            Event.id,
            Event.name,
            Event.start_at,
            local_date.label("local_date"),
            (local_date == on_date).label("matches"),
        ).where(Event.id == event_id)
        rows = self._execute(stmt)
        return rows[0] if rows else None
