"""
Check how an event's start time lands in the event time zone.

    python -m app.scripts.check_date_filter --event-id 114470 --date 2025-11-12

Prints the stored start instant, the local calendar day and whether it
matches the given date, i.e. whether ?date= would include the event.
"""
import argparse
import logging
import sys
from datetime import date

from app.core.config import settings
from app.core.exceptions import DataAccessError, StatementTimeoutError
from app.core.logging import setup_logging
from app.db.session import SessionLocal
from app.services.attendee_repository import AttendeeRepository
from app.services.projection import format_local_time

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--event-id", type=int, required=True)
    parser.add_argument("--date", type=date.fromisoformat, required=True, help="YYYY-MM-DD")
    parser.add_argument("--timezone", default=settings.EVENT_TIMEZONE)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    setup_logging(log_file=None)
    args = parse_args(argv)

    db = SessionLocal()
    try:
        repository = AttendeeRepository(db, timezone=args.timezone)
        row = repository.event_local_date(args.event_id, args.date)
    except (DataAccessError, StatementTimeoutError) as e:
        logger.error(f"Query failed: {e}")
        return 1
    finally:
        db.close()

    if row is None:
        logger.error(f"Event {args.event_id} not found")
        return 1

    print(f"event:       {row.id} {row.name!r}")
    print(f"start_at:    {row.start_at} (UTC)")
    print(f"local start: {format_local_time(row.start_at, args.timezone, settings.EVENT_TIME_FORMAT)} ({args.timezone})")
    print(f"local date:  {row.local_date}")
    print(f"param date:  {args.date}")
    print(f"matches:     {bool(row.matches)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
