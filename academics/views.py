import time
from urllib.parse import urlencode

from django.http import Http404, HttpResponseBadRequest
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required, student_required
from accounts.navigation import admin_tab_url, student_tab_url
from attendance.dates import day_to_time
from backend import service
from backend.feedback import flash_form_errors, load, submit
from backend.types import StudentResults
from .forms import CourseForm, DailyResultForm, TestResultForm
from .services import enrollment_rows, result_rows


@student_required
@require_POST
def request_enrollment(request, course_id: int):
    submit(
        request,
        service.request_enrollment,
        request.user.principal,
        course_id,
        success="Enrollment request submitted successfully!",
        failure="Failed to submit enrollment request",
    )
    return redirect(student_tab_url("enrollments"))


@student_required
@require_POST
def request_renewal(request, course_id: int):
    submit(
        request,
        service.request_renewal,
        request.user.principal,
        course_id,
        success="Renewal request submitted successfully!",
        failure="Failed to submit renewal request",
    )
    return redirect(student_tab_url("enrollments"))


def _find_course(request, course_id):
    course = load(request, service.get_course, request.user.principal, course_id)
    if course is None:
        raise Http404("Course not found")
    return course


@admin_required
def course_create(request):
    form = CourseForm(request.POST or None)
    if request.method == "POST":
        if form.is_valid():
            d = form.cleaned_data
            ok = submit(
                request,
                service.create_course,
                request.user.principal,
                d["title"],
                d["description"],
                d["instructor"],
                d["schedule"],
                d["monthly_fee"],
                success="Course created successfully!",
                failure="Failed to create course",
            )
            if ok:
                return redirect(admin_tab_url("courses"))
        else:
            flash_form_errors(request, form)
    return render(
        request,
        "academics/course_form.html",
        {"form": form, "course": None, "active_nav": "admin"},
    )


@admin_required
def course_edit(request, course_id: int):
    course = _find_course(request, course_id)
    if request.method == "POST":
        form = CourseForm(request.POST)
        if form.is_valid():
            d = form.cleaned_data
            ok = submit(
                request,
                service.update_course,
                request.user.principal,
                course.id,
                d["title"],
                d["description"],
                d["instructor"],
                d["schedule"],
                d["monthly_fee"],
                success="Course updated successfully!",
                failure="Failed to update course",
            )
            if ok:
                return redirect(admin_tab_url("courses"))
        else:
            flash_form_errors(request, form)
    else:
        form = CourseForm(
            initial={
                "title": course.title,
                "description": course.description,
                "instructor": course.instructor,
                "schedule": course.schedule,
                "monthly_fee": course.monthly_fee,
            }
        )
    return render(
        request,
        "academics/course_form.html",
        {"form": form, "course": course, "active_nav": "admin"},
    )


@admin_required
@require_POST
def course_delete(request, course_id: int):
    submit(
        request,
        service.delete_course,
        request.user.principal,
        course_id,
        success="Course deleted",
        failure="Failed to delete course",
    )
    return redirect(admin_tab_url("courses"))


def _selected_course(value):
    try:
        return int(value) if value else None
    except (TypeError, ValueError):
        return None


@admin_required
def enrollments(request):
    caller = request.user.principal
    students = load(request, service.get_all_student_profiles, caller, default=list)
    courses = load(request, service.get_all_courses, caller, default=list)
    titles = {c.id: c.title for c in courses}
    names = {str(p): profile.name for p, profile in students}
    selected_student = request.GET.get("student") or None
    selected_course = _selected_course(request.GET.get("course"))
    by_student = []
    by_course = []
    if selected_student:
        by_student = enrollment_rows(
            load(request, service.get_enrollments_by_user, caller, selected_student, default=list),
            titles,
            names,
        )
    if selected_course is not None:
        by_course = enrollment_rows(
            load(request, service.get_enrollments_by_course, caller, selected_course, default=list),
            titles,
            names,
        )
    ctx = {
        "students": students,
        "courses": courses,
        "selected_student": selected_student,
        "selected_course": selected_course,
        "by_student": by_student,
        "by_course": by_course,
        "active_nav": "admin",
    }
    return render(request, "academics/enrollments.html", ctx)


ENROLLMENT_ACTIONS = {
    "approve": (service.approve_enrollment, "Enrollment approved successfully!", "Failed to approve"),
    "approve_renewal": (service.approve_renewal, "Renewal approved successfully!", "Failed to approve"),
    "reject": (service.reject_enrollment, "Enrollment rejected", "Failed to reject"),
    "renew": (service.renew_enrollment, "Course renewed successfully!", "Failed to renew"),
}


@admin_required
@require_POST
def enrollment_action(request):
    action = ENROLLMENT_ACTIONS.get(request.POST.get("action"))
    student = request.POST.get("student")
    course_id = _selected_course(request.POST.get("course_id"))
    if action is None or not student or course_id is None:
        return HttpResponseBadRequest("action, student and course_id required")
    mutation, success, failure = action
    submit(
        request,
        mutation,
        request.user.principal,
        student,
        course_id,
        success=success,
        failure=failure,
    )
    back = {k: request.POST[k] for k in ("view_student", "view_course") if request.POST.get(k)}
    query = urlencode({k.replace("view_", ""): v for k, v in back.items()})
    return redirect(f"{reverse('academics:enrollments')}?{query}" if query else reverse("academics:enrollments"))


def _choices(request):
    caller = request.user.principal
    students = load(request, service.get_all_student_profiles, caller, default=list)
    courses = load(request, service.get_all_courses, caller, default=list)
    return students, courses


def _results_context(request, students, courses, test_form=None, daily_form=None):
    caller = request.user.principal
    selected = request.GET.get("student") or request.POST.get("student") or None
    ctx = {
        "test_form": test_form or TestResultForm(
            students=students, courses=courses, initial={"student": selected}
        ),
        "daily_form": daily_form or DailyResultForm(
            students=students, courses=courses, initial={"student": selected}
        ),
        "students": students,
        "selected_student": selected,
        "active_nav": "admin",
    }
    if selected:
        results = load(request, service.get_results_by_student, caller, selected, default=StudentResults)
        names = {str(p): profile.name for p, profile in students}
        ctx.update(result_rows(results, {c.id: c.title for c in courses}, names))
    return ctx


@admin_required
def results(request):
    ctx = _results_context(request, *_choices(request))
    return render(request, "academics/results.html", ctx)


def _results_redirect(student):
    return redirect(f"{reverse('academics:results')}?{urlencode({'student': student})}")


@admin_required
@require_POST
def create_test_result(request):
    students, courses = _choices(request)
    form = TestResultForm(request.POST, students=students, courses=courses)
    if not form.is_valid():
        flash_form_errors(request, form)
        ctx = _results_context(request, students, courses, test_form=form)
        return render(request, "academics/results.html", ctx)
    d = form.cleaned_data
    submit(
        request,
        service.create_test_result,
        request.user.principal,
        d["student"],
        d["course"],
        d["score"],
        d["grade"],
        d["passed"],
        d["feedback"],
        time.time_ns(),
        success="Test result created successfully!",
        failure="Failed to create test result",
    )
    return _results_redirect(d["student"])


@admin_required
@require_POST
def post_daily_result(request):
    students, courses = _choices(request)
    form = DailyResultForm(request.POST, students=students, courses=courses)
    if not form.is_valid():
        flash_form_errors(request, form)
        ctx = _results_context(request, students, courses, daily_form=form)
        return render(request, "academics/results.html", ctx)
    d = form.cleaned_data
    day = d["date"]
    submit(
        request,
        service.post_daily_result,
        request.user.principal,
        d["student"],
        d["course"],
        day_to_time(day.year, day.month, day.day),
        d["result_type"],
        d["score"],
        d["remarks"],
        success="Daily result posted successfully!",
        failure="Failed to post daily result",
    )
    return _results_redirect(d["student"])
