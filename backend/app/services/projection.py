from datetime import date, datetime, timezone as dt_timezone
from typing import Any, Mapping, Optional
from zoneinfo import ZoneInfo

from app.schemas import AttendeeRow, RawAttendeeRow

UNKNOWN_ATTENDEE = "Unknown"
MISSING = "-"


def local_today(timezone: str) -> date:
    """Calendar day it currently is in the event time zone"""
    return datetime.now(ZoneInfo(timezone)).date()


def format_local_time(value: Optional[datetime], timezone: str, time_format: str) -> str:
    """Render a stored timestamp in the event time zone; naive values are UTC"""
    if value is None:
        return MISSING
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt_timezone.utc)
    return value.astimezone(ZoneInfo(timezone)).strftime(time_format)


def resolve_seat_info(seat_id: Optional[str], seat_obj: Optional[Any]) -> Optional[str]:
    """
    Seat label shown to the user.

    The raw seat id wins; otherwise the labeled components of the structured
    description are rendered as "label: value" pairs in their stored order.
    Anything else stored in seat_obj is ignored.
    """
    if seat_id:
        return seat_id

    components = seat_obj.get("components") if isinstance(seat_obj, Mapping) else None
    if not isinstance(components, list):
        return None

    labeled = [c for c in components if isinstance(c, Mapping) and c.get("label")]
    if not labeled:
        return None
    return ", ".join(f"{c['label']}: {c.get('value', '')}" for c in labeled)


def compose_attendee_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    if first_name and last_name:
        return f"{first_name} {last_name}"
    return first_name or last_name or UNKNOWN_ATTENDEE


def project_row(
    row: RawAttendeeRow,
    event_start_times: Mapping[int, str],
    timezone: str,
    time_format: str,
) -> AttendeeRow:
    checkin = row.checkin_timestamp
    return AttendeeRow(
        event_id=row.event_id,
        event_start_time=event_start_times.get(row.event_id) or MISSING,
        attendee_name=compose_attendee_name(row.first_name, row.last_name),
        seat_info=resolve_seat_info(row.seat_id, row.seat_obj),
        validated_at=format_local_time(checkin, timezone, time_format) if checkin else None,
    )
