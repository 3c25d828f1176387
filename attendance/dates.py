"""Attendance calendar model.

Days travel to the backend as nanosecond timestamps pinned to 12:00 UTC, so
converting back to a calendar day never slips across a date boundary.
"""
from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from backend.types import AttendanceStatus

PRESENT = "present"
ABSENT = "absent"
UNMARKED = "unmarked"

NANOS_PER_MILLI = 1_000_000
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def previous_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> Tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def format_month_year(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def day_to_time(year: int, month: int, day: int) -> int:
    noon = datetime(year, month, day, 12, 0, 0, tzinfo=timezone.utc)
    millis = (noon - EPOCH) // timedelta(milliseconds=1)
    return millis * NANOS_PER_MILLI


def time_to_day(timestamp: int) -> Tuple[int, int, int]:
    millis = int(timestamp) // NANOS_PER_MILLI
    moment = EPOCH + timedelta(milliseconds=millis)
    return moment.year, moment.month, moment.day


def day_key(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def build_lookup(entries: Iterable) -> Dict[str, object]:
    """Map "YYYY-MM-DD" to its attendance entry.

    If several entries fall on the same day, the last one wins.
    """
    lookup = {}
    for entry in entries:
        lookup[day_key(*time_to_day(entry.date))] = entry
    return lookup


def status_for_day(lookup: Dict[str, object], year: int, month: int, day: int) -> str:
    entry = lookup.get(day_key(year, month, day))
    if entry is None:
        return UNMARKED
    if entry.status == AttendanceStatus.PRESENT:
        return PRESENT
    return ABSENT


def next_marking_status(current: str) -> AttendanceStatus:
    # Marking only ever adds: there is no way back to unmarked.
    if current == PRESENT:
        return AttendanceStatus.ABSENT
    return AttendanceStatus.PRESENT


def month_day_states(entries: Iterable, year: int, month: int) -> Dict[int, str]:
    lookup = build_lookup(entries)
    return {
        day: status_for_day(lookup, year, month, day)
        for day in range(1, days_in_month(year, month) + 1)
    }


def month_weeks(year: int, month: int, day_states: Optional[Dict[int, str]] = None) -> List[List[Optional[dict]]]:
    """Rows of a Sunday-first calendar grid; padding cells are None."""
    day_states = day_states or {}
    weeks = []
    for week in calendar.Calendar(firstweekday=6).monthdayscalendar(year, month):
        row = []
        for day in week:
            if not day:
                row.append(None)
                continue
            row.append(
                {
                    "day": day,
                    "status": day_states.get(day, UNMARKED),
                    "key": day_key(year, month, day),
                }
            )
        weeks.append(row)
    return weeks


def month_summary(day_states: Dict[int, str]) -> Dict[str, int]:
    summary = {PRESENT: 0, ABSENT: 0, UNMARKED: 0}
    for status in day_states.values():
        summary[status] += 1
    return summary


def parse_month(params, today: date) -> Tuple[int, int]:
    """Year and month from query parameters, defaulting to today's month."""
    try:
        year = int(params.get("year", today.year))
        month = int(params.get("month", today.month))
    except (TypeError, ValueError):
        return today.year, today.month
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        return today.year, today.month
    return year, month


def parse_day(value) -> Optional[Tuple[int, int, int]]:
    """(year, month, day) from a "YYYY-MM-DD" string, or None if invalid."""
    try:
        parsed = date.fromisoformat(str(value))
    except ValueError:
        return None
    return parsed.year, parsed.month, parsed.day
