import logging
from datetime import date
from html import escape
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse

from app.api.deps import get_attendee_list_service
from app.core.config import settings
from app.core.exceptions import DataAccessError
from app.schemas import EventGroup
from app.services.attendee_list import AttendeeListService
from app.services.presentation import filter_by_name, group_by_event, summarize
from app.services.projection import local_today

router = APIRouter()
logger = logging.getLogger(__name__)

PAGE = """
<!DOCTYPE html>
<html>
<head>
    <title>Attendees List</title>
    <style>
        body {{ font-family: Arial, sans-serif; padding: 32px; background: #f9fafb; color: #111827; }}
        .container {{ max-width: 1100px; margin: 0 auto; }}
        .card {{ background: white; border: 1px solid #e5e7eb; border-radius: 8px; margin: 16px 0; overflow: hidden; }}
        .card h3 {{ margin: 0; padding: 16px 24px; display: flex; justify-content: space-between; }}
        .badge {{ background: #eff6ff; color: #1d4ed8; border-radius: 999px; padding: 2px 12px; font-size: 14px; }}
        table {{ width: 100%; border-collapse: collapse; }}
        th {{ background: #f9fafb; text-align: left; font-size: 12px; text-transform: uppercase; padding: 12px 24px; }}
        td {{ padding: 12px 24px; border-top: 1px solid #e5e7eb; font-size: 14px; }}
        .notice {{ background: #fffbeb; border: 1px solid #fcd34d; padding: 12px 24px; border-radius: 8px; }}
        .error {{ background: #fef2f2; border: 1px solid #fca5a5; padding: 12px 24px; border-radius: 8px; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Attendees List</h1>
        <p>View all attendees with their seat assignments and validation status</p>
        <form method="get">
            <input type="date" name="date" value="{date}">
            <input type="search" name="q" placeholder="Search by name" value="{query}">
            <button type="submit">Refresh</button>
        </form>
        {body}
    </div>
</body>
</html>
"""


def render_group(group: EventGroup) -> str:
    count = len(group.attendees)
    rows = "".join(
        "<tr><td>{name}</td><td>{seat}</td><td>{validated}</td></tr>".format(
            name=escape(row.attendee_name),
            seat=escape(row.seat_info or "-"),
            validated=escape(row.validated_at or "-"),
        )
        for row in group.attendees
    )
    return (
        '<div class="card">'
        f'<h3><span>{escape(group.event_start_time)}</span>'
        f'<span class="badge">{count} {"attendee" if count == 1 else "attendees"}</span></h3>'
        "<table><thead><tr><th>Attendee Name</th><th>Seat ID</th><th>Validated At</th></tr></thead>"
        f"<tbody>{rows}</tbody></table></div>"
    )


def render_groups(groups: List[EventGroup], seats_included: Optional[bool]) -> str:
    if not groups:
        return '<div class="card"><p style="padding: 24px;">No attendees found</p></div>'

    parts = []
    if seats_included is False:
        parts.append('<p class="notice">The database was too busy to load seat assignments; showing attendees only.</p>')
    parts.extend(render_group(g) for g in groups)
    parts.append(f'<div class="card"><p style="padding: 0 24px;">{escape(summarize(groups))}</p></div>')
    return "".join(parts)


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    on_date: Optional[date] = Query(default=None, alias="date"),
    q: Optional[str] = Query(default=None, description="Case-insensitive name filter"),
    service: AttendeeListService = Depends(get_attendee_list_service),
):
    """Grouped, seat-sorted attendee table for one day"""
    on_date = on_date or local_today(settings.EVENT_TIMEZONE)
    page_args = {"date": on_date.isoformat(), "query": escape(q or "")}

    try:
        response = service.get_attendees(on_date)
    except DataAccessError as e:
        logger.error(f"Dashboard: database unreachable: {e}", exc_info=True)
        body = '<p class="error">Database connection failed. Please try again.</p>'
        return HTMLResponse(PAGE.format(body=body, **page_args), status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    except Exception as e:
        logger.error(f"Dashboard error: {e}", exc_info=True)
        body = '<p class="error">Failed to load attendees.</p>'
        return HTMLResponse(PAGE.format(body=body, **page_args), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    rows = filter_by_name(response.results, q)
    groups = group_by_event(rows, settings.EVENT_TIME_FORMAT)
    body = render_groups(groups, response.metadata.seat_assignments_included)
    return HTMLResponse(PAGE.format(body=body, **page_args))
