"""Attendance calendar arithmetic."""
from datetime import date

import pytest

from attendance.dates import (
    ABSENT,
    PRESENT,
    UNMARKED,
    build_lookup,
    day_to_time,
    days_in_month,
    format_month_year,
    month_day_states,
    month_summary,
    month_weeks,
    next_marking_status,
    next_month,
    parse_day,
    parse_month,
    previous_month,
    status_for_day,
    time_to_day,
)
from backend.types import AttendanceEntry, AttendanceStatus


@pytest.mark.parametrize(
    "day",
    [(1970, 1, 1), (2000, 2, 29), (2024, 3, 5), (2024, 12, 31), (2099, 7, 15)],
)
def test_day_round_trips_through_timestamp(day):
    assert time_to_day(day_to_time(*day)) == day


def test_day_to_time_is_noon_utc_in_nanoseconds():
    # 2024-03-05T12:00:00Z
    assert day_to_time(2024, 3, 5) == 1709640000 * 1_000_000_000


def test_time_to_day_ignores_sub_millisecond_noise():
    ts = day_to_time(2024, 3, 5) + 999_999
    assert time_to_day(ts) == (2024, 3, 5)


def test_days_in_month_handles_leap_years():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2000, 2) == 29
    assert days_in_month(2024, 4) == 30
    assert days_in_month(2024, 1) == 31


def test_month_navigation_wraps_year():
    assert next_month(2024, 12) == (2025, 1)
    assert previous_month(2024, 1) == (2023, 12)
    assert next_month(2024, 5) == (2024, 6)
    assert previous_month(2024, 5) == (2024, 4)


def test_format_month_year():
    assert format_month_year(2024, 3) == "March 2024"


def _entry(y, m, d, status):
    return AttendanceEntry(date=day_to_time(y, m, d), status=status)


def test_lookup_present_and_unmarked():
    lookup = build_lookup([_entry(2024, 3, 5, AttendanceStatus.PRESENT)])
    assert status_for_day(lookup, 2024, 3, 5) == PRESENT
    assert status_for_day(lookup, 2024, 3, 6) == UNMARKED


def test_lookup_last_entry_wins_on_duplicates():
    entries = [
        _entry(2024, 3, 5, AttendanceStatus.PRESENT),
        _entry(2024, 3, 5, AttendanceStatus.ABSENT),
    ]
    assert status_for_day(build_lookup(entries), 2024, 3, 5) == ABSENT


def test_marking_toggle_never_returns_to_unmarked():
    seen = []
    current = UNMARKED
    for _ in range(3):
        current = next_marking_status(current).value
        seen.append(current)
    assert seen == [PRESENT, ABSENT, PRESENT]


def test_month_day_states_and_summary():
    entries = [
        _entry(2024, 2, 1, AttendanceStatus.PRESENT),
        _entry(2024, 2, 29, AttendanceStatus.ABSENT),
        _entry(2024, 3, 1, AttendanceStatus.PRESENT),
    ]
    states = month_day_states(entries, 2024, 2)
    assert len(states) == 29
    assert states[1] == PRESENT
    assert states[29] == ABSENT
    assert month_summary(states) == {PRESENT: 1, ABSENT: 1, UNMARKED: 27}


def test_month_weeks_start_on_sunday():
    # March 2024 starts on a Friday.
    weeks = month_weeks(2024, 3, {5: PRESENT})
    first = weeks[0]
    assert first[:5] == [None] * 5
    assert first[5]["day"] == 1
    assert first[5]["key"] == "2024-03-01"
    cells = [c for week in weeks for c in week if c]
    assert len(cells) == 31
    assert cells[4]["status"] == PRESENT
    assert cells[5]["status"] == UNMARKED


def test_parse_month_falls_back_to_today():
    today = date(2024, 3, 5)
    assert parse_month({}, today) == (2024, 3)
    assert parse_month({"year": "2023", "month": "12"}, today) == (2023, 12)
    assert parse_month({"year": "2023", "month": "13"}, today) == (2024, 3)
    assert parse_month({"year": "abc", "month": "1"}, today) == (2024, 3)


def test_parse_day():
    assert parse_day("2024-03-05") == (2024, 3, 5)
    assert parse_day("2024-02-30") is None
    assert parse_day(None) is None
