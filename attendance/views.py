import logging
from urllib.parse import urlencode

from django.contrib import messages
from django.http import HttpResponseBadRequest
from django.shortcuts import redirect, render
from django.urls import reverse

from accounts.decorators import admin_required
from backend import service
from backend.client import BackendError
from backend.feedback import load, submit
from .dates import (
    ABSENT,
    PRESENT,
    build_lookup,
    day_to_time,
    next_marking_status,
    parse_day,
    status_for_day,
)
from .services import calendar_context, month_from_request

logger = logging.getLogger(__name__)

STATUS_LABELS = {PRESENT: "Present", ABSENT: "Absent"}


@admin_required
def student_calendar(request, principal: str):
    caller = request.user.principal
    if request.method == "POST":
        return _toggle_day(request, principal)

    year, month = month_from_request(request)
    profile = load(request, service.get_student_profile, caller, principal)
    entries = load(request, service.get_student_attendance, caller, principal, default=list)
    ctx = {
        "principal": principal,
        "profile": profile,
        "calendar": calendar_context(entries, year, month),
        "editable": True,
        "active_nav": "admin",
    }
    return render(request, "attendance/student_calendar.html", ctx)


def _toggle_day(request, principal):
    parsed = parse_day(request.POST.get("day"))
    if parsed is None:
        return HttpResponseBadRequest("day must be YYYY-MM-DD")
    year, month, day = parsed
    caller = request.user.principal
    url = reverse("attendance:student_calendar", args=[principal])
    back = f"{url}?{urlencode({'year': year, 'month': month})}"

    # Without the current marks the toggle has nothing to flip.
    try:
        entries = service.get_student_attendance(caller, principal)
    except BackendError as e:
        logger.error("Backend %s failed for user %s: %s", e.method, request.user.pk, e.message)
        messages.error(request, e.message or "Failed to load attendance")
        return redirect(back)
    current = status_for_day(build_lookup(entries), year, month, day)
    status = next_marking_status(current)
    label = STATUS_LABELS[status.value]
    ok = submit(
        request,
        service.mark_attendance,
        caller,
        principal,
        day_to_time(year, month, day),
        status,
        success=f"Marked as {label}",
        failure="Failed to mark attendance",
    )
    if ok:
        logger.info("Attendance for %s on %04d-%02d-%02d set to %s", principal, year, month, day, status.value)
    return redirect(back)
