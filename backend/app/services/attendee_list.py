import logging
from datetime import date
from typing import Optional

from app.core.config import Settings
from app.schemas import AttendeeListMetadata, AttendeeListResponse
from app.services.attendee_fetcher import AttendeeFetcher
from app.services.attendee_repository import AttendeeRepository
from app.services.event_resolver import EventResolver
from app.services.projection import project_row

logger = logging.getLogger(__name__)


class AttendeeListService:
    """Resolve events, fetch their attendees and project them into display rows"""

    def __init__(self, repository: AttendeeRepository, settings: Settings):
        self.host_user_id = settings.HOST_USER_ID
        self.timezone = settings.EVENT_TIMEZONE
        self.time_format = settings.EVENT_TIME_FORMAT
        self.resolver = EventResolver(
            repository,
            host_user_id=settings.HOST_USER_ID,
            include=settings.EVENT_NAME_INCLUDE,
            exclude=settings.EVENT_NAME_EXCLUDE,
            timezone=settings.EVENT_TIMEZONE,
            time_format=settings.EVENT_TIME_FORMAT,
        )
        self.fetcher = AttendeeFetcher(repository, max_rows=settings.MAX_ROWS)

    def get_attendees(self, on_date: Optional[date] = None) -> AttendeeListResponse:
        logger.info(f"Fetching attendees list for host {self.host_user_id} (date={on_date})")

        events = self.resolver.resolve(on_date)
        if not events:
            return AttendeeListResponse(
                results=[],
                metadata=AttendeeListMetadata(host_user_id=self.host_user_id, total=0),
            )

        fetched = self.fetcher.fetch([e.id for e in events])
        start_times = {e.id: e.start_display for e in events}
        results = [
            project_row(row, start_times, self.timezone, self.time_format)
            for row in fetched.rows
        ]

        logger.info(
            f"Returning {len(results)} row(s) via {fetched.strategy} "
            f"(seat assignments included: {fetched.seat_assignments_included})"
        )
        return AttendeeListResponse(
            results=results,
            metadata=AttendeeListMetadata(
                host_user_id=self.host_user_id,
                total=len(results),
                seat_assignments_included=fetched.seat_assignments_included,
            ),
        )
