from django.conf import settings

from backend import service
from backend.feedback import load
from backend.types import CoursesWithEnrollmentStatus, StudentResults
from .status import course_states, request_actions, request_badge


def courses_panel(request):
    return {"courses": load(request, service.get_all_courses, request.user.principal, default=list)}


def enrollment_panel(request):
    overview = load(
        request,
        service.get_courses_with_enrollment_status,
        request.user.principal,
        default=CoursesWithEnrollmentStatus,
    )
    return {
        "course_states": course_states(overview),
        "validity_days": settings.ENROLLMENT_VALIDITY_DAYS,
    }


def _course_titles(request):
    courses = load(request, service.get_all_courses, request.user.principal, default=list)
    return {c.id: c.title for c in courses}


def result_rows(results: StudentResults, titles, names=None):
    names = names or {}
    tests = [
        {
            "result": r,
            "course": titles.get(r.course_id, "Unknown Course"),
            "student": names.get(str(r.student), ""),
        }
        for r in sorted(results.test_results, key=lambda r: r.date, reverse=True)
    ]
    daily = [
        {
            "result": r,
            "course": titles.get(r.course_id, "Unknown Course"),
            "student": names.get(str(r.student), ""),
        }
        for r in sorted(results.daily_results, key=lambda r: r.date, reverse=True)
    ]
    return {"test_rows": tests, "daily_rows": daily, "has_results": not results.is_empty}


def results_panel(request, student=None):
    caller = request.user.principal
    results = load(
        request,
        service.get_results_by_student,
        caller,
        student or caller,
        default=StudentResults,
    )
    return result_rows(results, _course_titles(request))


def enrollment_rows(requests, titles, names):
    rows = []
    for req in sorted(requests, key=lambda r: r.request_date, reverse=True):
        label, badge = request_badge(req)
        rows.append(
            {
                "request": req,
                "course": titles.get(req.course_id, "Unknown Course"),
                "student": names.get(str(req.student), str(req.student)),
                "label": label,
                "badge": badge,
                "actions": request_actions(req),
            }
        )
    return rows
