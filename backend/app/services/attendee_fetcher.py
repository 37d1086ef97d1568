import logging
import time
from enum import Enum
from typing import Dict, List, Optional, Sequence

from app.core.exceptions import StatementTimeoutError
from app.schemas import FetchResult, RawAttendeeRow
from app.services.attendee_repository import AttendeeRepository

logger = logging.getLogger(__name__)


class FetchStrategy(str, Enum):
    BULK = "bulk"            # one joined query across every event
    PER_EVENT = "per_event"  # the same join, one event at a time
    NO_SEATS = "no_seats"    # attendees only, seat data dropped


# Only a statement timeout moves the fetcher along this chain
NEXT_STRATEGY: Dict[FetchStrategy, Optional[FetchStrategy]] = {
    FetchStrategy.BULK: FetchStrategy.PER_EVENT,
    FetchStrategy.PER_EVENT: FetchStrategy.NO_SEATS,
    FetchStrategy.NO_SEATS: None,
}


class AttendeeFetcher:
    """
    Fetch attendee + seat rows for a set of events, degrading under load.

    Strategies are tried in order BULK -> PER_EVENT -> NO_SEATS. The next
    one is entered only when the current one raises StatementTimeoutError;
    any other exception propagates immediately. Every strategy caps its
    output at ``max_rows``.
    """

    def __init__(self, repository: AttendeeRepository, max_rows: int = 10000):
        self.repository = repository
        self.max_rows = max_rows

    def fetch(self, event_ids: Sequence[int]) -> FetchResult:
        event_ids = list(event_ids)
        if not event_ids:
            return FetchResult(rows=[], seat_assignments_included=True)

        strategy = FetchStrategy.BULK
        while True:
            start_time = time.monotonic()
            try:
                result = self._run(strategy, event_ids)
            except StatementTimeoutError:
                elapsed = (time.monotonic() - start_time) * 1000
                next_strategy = NEXT_STRATEGY[strategy]
                if next_strategy is None:
                    logger.error(f"{strategy.value} fetch timed out after {elapsed:.0f}ms; no fallback left")
                    raise
                logger.warning(
                    f"{strategy.value} fetch timed out after {elapsed:.0f}ms, "
                    f"falling back to {next_strategy.value}"
                )
                strategy = next_strategy
                continue

            elapsed = (time.monotonic() - start_time) * 1000
            logger.info(
                f"{strategy.value} fetch complete in {elapsed:.0f}ms: "
                f"{len(result.rows)} row(s) from {len(event_ids)} event(s)"
            )
            return result

    def _run(self, strategy: FetchStrategy, event_ids: List[int]) -> FetchResult:
        if strategy is FetchStrategy.BULK:
            return self._fetch_bulk(event_ids)
        if strategy is FetchStrategy.PER_EVENT:
            return self._fetch_per_event(event_ids)
        return self._fetch_without_seats(event_ids)

    def _fetch_bulk(self, event_ids: List[int]) -> FetchResult:
        rows = self.repository.fetch_attendee_seats(event_ids, self.max_rows)
        return FetchResult(
            rows=rows[: self.max_rows],
            seat_assignments_included=True,
            strategy=FetchStrategy.BULK.value,
        )

    def _fetch_per_event(self, event_ids: List[int]) -> FetchResult:
        rows: List[RawAttendeeRow] = []
        for index, event_id in enumerate(event_ids):
            rows.extend(self.repository.fetch_attendee_seats([event_id], self.max_rows - len(rows)))
            logger.debug(f"Event {event_id}: {len(rows)} row(s) accumulated")

            if len(rows) >= self.max_rows:
                skipped = len(event_ids) - index - 1
                if skipped:
                    logger.warning(f"Row cap {self.max_rows} reached; skipping {skipped} remaining event(s)")
                rows = rows[: self.max_rows]
                break

        return FetchResult(
            rows=rows,
            seat_assignments_included=True,
            strategy=FetchStrategy.PER_EVENT.value,
        )

    def _fetch_without_seats(self, event_ids: List[int]) -> FetchResult:
        rows = self.repository.fetch_attendees(event_ids, self.max_rows)
        return FetchResult(
            rows=[row.without_seat() for row in rows[: self.max_rows]],
            seat_assignments_included=False,
            strategy=FetchStrategy.NO_SEATS.value,
        )
