from datetime import date, datetime

import pytest

from app.core.exceptions import DataAccessError, StatementTimeoutError
from app.services.attendee_list import AttendeeListService
from app.services.event_resolver import EventResolver
from fakes import HOST_USER_ID, FakeAttendeeRepository, make_event, make_row


def test_resolver_passes_filters_and_formats_start(test_settings):
    repo = FakeAttendeeRepository(events=[make_event(7, datetime(2025, 11, 13, 0, 30), attendee_count=3)])
    resolver = EventResolver(
        repo,
        host_user_id=HOST_USER_ID,
        include="POLAR EXPRESS",
        exclude="PARKING",
        timezone="America/Chicago",
        time_format="%m/%d/%Y, %I:%M %p",
    )

    events = resolver.resolve(date(2025, 11, 12))

    assert repo.called("find_events") == [
        ("find_events", HOST_USER_ID, "POLAR EXPRESS", "PARKING", date(2025, 11, 12))
    ]
    assert [e.start_display for e in events] == ["11/12/2025, 06:30 PM"]
    assert events[0].attendee_count == 3


def test_no_qualifying_events_short_circuits(test_settings):
    repo = FakeAttendeeRepository()

    response = AttendeeListService(repo, test_settings).get_attendees()

    assert response.to_payload() == {
        "results": [],
        "metadata": {"hostUserId": HOST_USER_ID, "total": 0},
    }
    assert [c[0] for c in repo.calls] == ["find_events"]


def test_every_attendee_gets_a_row(test_settings):
    repo = FakeAttendeeRepository(
        events=[make_event(7, datetime(2025, 11, 13, 0, 30))],
        rows=[
            make_row(2, 7, first_name="Ana", last_name="Lee", guest_id=20, seat_id="CAR 1-Seat 2"),
            make_row(2, 7, first_name="Ana", last_name="Lee", guest_id=21, seat_id="CAR 1-Seat 3"),
            make_row(1, 7, first_name="Juan", last_name="Cruz"),
        ],
    )

    payload = AttendeeListService(repo, test_settings).get_attendees().to_payload()

    assert payload["metadata"] == {
        "hostUserId": HOST_USER_ID,
        "total": 3,
        "seatAssignmentsIncluded": True,
    }
    assert [(r["attendeeName"], r["seatInfo"]) for r in payload["results"]] == [
        ("Ana Lee", "CAR 1-Seat 2"),
        ("Ana Lee", "CAR 1-Seat 3"),
        ("Juan Cruz", None),
    ]
    assert {r["eventStartTime"] for r in payload["results"]} == {"11/12/2025, 06:30 PM"}


def test_degraded_fetch_is_reported_in_metadata(test_settings):
    repo = FakeAttendeeRepository(
        events=[make_event(7), make_event(8)],
        rows=[make_row(1, 7, seat_id="CAR 1-Seat 1"), make_row(2, 8, seat_id="CAR 1-Seat 2")],
        failures={
            "bulk": StatementTimeoutError("canceled"),
            "per_event": StatementTimeoutError("canceled"),
        },
    )

    payload = AttendeeListService(repo, test_settings).get_attendees().to_payload()

    assert payload["metadata"]["seatAssignmentsIncluded"] is False
    assert all(r["seatInfo"] is None and r["validatedAt"] is None for r in payload["results"])


def test_row_cap_comes_from_settings(test_settings):
    test_settings.MAX_ROWS = 2
    repo = FakeAttendeeRepository(
        events=[make_event(7)],
        rows=[make_row(i, 7) for i in range(5)],
    )

    payload = AttendeeListService(repo, test_settings).get_attendees().to_payload()

    assert payload["metadata"]["total"] == 2
    assert repo.called("bulk")[0][2] == 2


def test_event_lookup_failure_propagates(test_settings):
    repo = FakeAttendeeRepository(failures={"find_events": DataAccessError("could not connect")})

    with pytest.raises(DataAccessError):
        AttendeeListService(repo, test_settings).get_attendees()
