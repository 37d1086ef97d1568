import re
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple, Union

from app.schemas import AttendeeRow, EventGroup

# "CAR 4 - Seat 25", "Car 2 Table 7", "Car: 1, Seat: 10"
SEAT_PATTERN = re.compile(
    r"car[\s:#]*(\d+)[\s,:\-–]*(?:seat|table)[\s:#]*(\d+)",
    re.IGNORECASE,
)

UNPLACED = (float("inf"), float("inf"))


def filter_by_name(rows: Iterable[AttendeeRow], query: Optional[str]) -> List[AttendeeRow]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(rows)
    return [row for row in rows if needle in row.attendee_name.lower()]


def seat_sort_key(seat_info: Optional[str]) -> Tuple[float, float]:
    """(car, seat-or-table); anything unparseable sorts after every real seat"""
    if not seat_info:
        return UNPLACED
    match = SEAT_PATTERN.search(seat_info)
    if not match:
        return UNPLACED
    return (float(match.group(1)), float(match.group(2)))


def sort_by_seat(rows: Iterable[AttendeeRow]) -> List[AttendeeRow]:
    return sorted(rows, key=lambda row: seat_sort_key(row.seat_info))


def parse_event_time(display: str, time_format: str) -> datetime:
    try:
        return datetime.strptime(display, time_format)
    except (TypeError, ValueError):
        return datetime.max


def group_by_event(rows: Iterable[AttendeeRow], time_format: str) -> List[EventGroup]:
    """
    Bucket rows per event, seat-sort each bucket and order buckets by start time.

    Rows are keyed by event id so that two events sharing a display time
    stay separate; rows without an id fall back to the display string.
    """
    buckets: Dict[Union[int, str], EventGroup] = {}
    for row in rows:
        key = row.event_id if row.event_id is not None else row.event_start_time
        group = buckets.get(key)
        if group is None:
            group = buckets[key] = EventGroup(
                event_start_time=row.event_start_time,
                event_ids=[row.event_id] if row.event_id is not None else [],
                attendees=[],
            )
        group.attendees.append(row)

    groups = [
        group.model_copy(update={"attendees": sort_by_seat(group.attendees)})
        for group in buckets.values()
    ]
    groups.sort(key=lambda g: parse_event_time(g.event_start_time, time_format))
    return groups


def summarize(groups: List[EventGroup]) -> str:
    total = sum(len(g.attendees) for g in groups)
    return (
        f"Total: {total} attendee{'' if total == 1 else 's'} "
        f"across {len(groups)} event{'' if len(groups) == 1 else 's'}"
    )
