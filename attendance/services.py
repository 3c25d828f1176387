from django.utils import timezone

from backend import service
from backend.feedback import load
from .dates import (
    format_month_year,
    month_day_states,
    month_summary,
    month_weeks,
    next_month,
    parse_month,
    previous_month,
)


def calendar_context(entries, year: int, month: int):
    states = month_day_states(entries, year, month)
    prev_year, prev_month = previous_month(year, month)
    next_year, next_month_ = next_month(year, month)
    return {
        "year": year,
        "month": month,
        "month_label": format_month_year(year, month),
        "weeks": month_weeks(year, month, states),
        "summary": month_summary(states),
        "prev": {"year": prev_year, "month": prev_month},
        "next": {"year": next_year, "month": next_month_},
    }


def month_from_request(request):
    return parse_month(request.GET, timezone.localdate())


def student_calendar_panel(request):
    """Read-only calendar of the caller's own attendance."""
    year, month = month_from_request(request)
    entries = load(request, service.get_caller_attendance, request.user.principal, default=list)
    return {"calendar": calendar_context(entries, year, month)}
