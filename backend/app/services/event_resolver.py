import logging
from datetime import date
from typing import List, Optional

from app.schemas import EventSummary
from app.services.attendee_repository import AttendeeRepository
from app.services.projection import format_local_time

logger = logging.getLogger(__name__)


class EventResolver:
    """Resolves which of the host's events qualify for the attendee list"""

    def __init__(
        self,
        repository: AttendeeRepository,
        host_user_id: int,
        include: str,
        exclude: str,
        timezone: str,
        time_format: str,
    ):
        self.repository = repository
        self.host_user_id = host_user_id
        self.include = include
        self.exclude = exclude
        self.timezone = timezone
        self.time_format = time_format

    def resolve(self, on_date: Optional[date] = None) -> List[EventSummary]:
        events = self.repository.find_events(
            self.host_user_id,
            include=self.include,
            exclude=self.exclude,
            on_date=on_date,
        )

        resolved = [
            event.model_copy(
                update={"start_display": format_local_time(event.start_at, self.timezone, self.time_format)}
            )
            for event in events
        ]

        if not resolved:
            logger.info(f"No {self.include} events with attendees for host {self.host_user_id} (date={on_date})")
            return resolved

        total = sum(e.attendee_count for e in resolved)
        logger.info(f"Found {len(resolved)} event(s) with {total} total attendees (date={on_date})")
        for e in resolved:
            logger.debug(f"  - Event {e.id}: {e.name!r} ({e.attendee_count} attendees)")
        return resolved
