from app.schemas import AttendeeRow
from app.services.presentation import (
    filter_by_name,
    group_by_event,
    seat_sort_key,
    sort_by_seat,
    summarize,
)

FMT = "%m/%d/%Y, %I:%M %p"


def row(name, seat=None, event_id=1, start="11/12/2025, 06:30 PM"):
    return AttendeeRow(event_id=event_id, event_start_time=start, attendee_name=name, seat_info=seat)


def test_seats_sort_by_car_then_seat_with_unparsed_last():
    rows = [row("a", "CAR 2-Seat 3"), row("b", "CAR 1-Seat 10"), row("c", None)]

    assert [r.seat_info for r in sort_by_seat(rows)] == ["CAR 1-Seat 10", "CAR 2-Seat 3", None]


def test_seat_numbers_compare_numerically():
    rows = [row("a", "CAR 1-Seat 10"), row("b", "CAR 1-Seat 9")]

    assert [r.seat_info for r in sort_by_seat(rows)] == ["CAR 1-Seat 9", "CAR 1-Seat 10"]


def test_seat_sort_key_variants():
    assert seat_sort_key("car 3 - table 7") == (3, 7)
    assert seat_sort_key("CAR 3 Seat 7") == (3, 7)
    assert seat_sort_key("Car: 4, Seat: 25") == (4, 25)
    assert seat_sort_key("General Admission") == (float("inf"), float("inf"))
    assert seat_sort_key(None) == (float("inf"), float("inf"))


def test_filter_by_name_is_case_insensitive():
    rows = [row("Ana Lee"), row("Juan Cruz")]

    assert [r.attendee_name for r in filter_by_name(rows, "ana")] == ["Ana Lee"]


def test_empty_filter_matches_everything():
    rows = [row("Ana Lee"), row("Juan Cruz")]

    assert filter_by_name(rows, "") == rows
    assert filter_by_name(rows, None) == rows
    assert filter_by_name(rows, "   ") == rows


def test_groups_are_ordered_chronologically_and_seat_sorted():
    rows = [
        row("late-2", "CAR 2-Seat 1", event_id=2, start="11/12/2025, 08:00 PM"),
        row("late-1", "CAR 1-Seat 1", event_id=2, start="11/12/2025, 08:00 PM"),
        row("early", "CAR 1-Seat 1", event_id=1, start="11/12/2025, 06:30 PM"),
    ]

    groups = group_by_event(rows, FMT)

    assert [g.event_start_time for g in groups] == ["11/12/2025, 06:30 PM", "11/12/2025, 08:00 PM"]
    assert [r.attendee_name for r in groups[1].attendees] == ["late-1", "late-2"]


def test_events_sharing_a_display_time_stay_separate():
    rows = [
        row("a", event_id=1, start="11/12/2025, 06:30 PM"),
        row("b", event_id=2, start="11/12/2025, 06:30 PM"),
    ]

    groups = group_by_event(rows, FMT)

    assert len(groups) == 2
    assert [g.event_ids for g in groups] == [[1], [2]]


def test_rows_without_event_id_group_by_display_string():
    rows = [
        row("a", event_id=None, start="11/12/2025, 06:30 PM"),
        row("b", event_id=None, start="11/12/2025, 06:30 PM"),
    ]

    groups = group_by_event(rows, FMT)

    assert len(groups) == 1
    assert len(groups[0].attendees) == 2


def test_unparseable_start_times_sort_last():
    rows = [row("x", event_id=1, start="-"), row("y", event_id=2, start="11/12/2025, 06:30 PM")]

    assert [g.event_start_time for g in group_by_event(rows, FMT)] == ["11/12/2025, 06:30 PM", "-"]


def test_summarize():
    groups = group_by_event([row("a", event_id=1), row("b", event_id=1), row("c", event_id=2)], FMT)

    assert summarize(groups) == "Total: 3 attendees across 2 events"
    assert summarize(group_by_event([row("a")], FMT)) == "Total: 1 attendee across 1 event"
