from django.shortcuts import render

from academics.services import courses_panel, enrollment_panel, results_panel
from attendance.services import student_calendar_panel
from backend import service
from backend.feedback import load
from content.services import announcements_panel, settings_panel
from students.services import students_panel
from .decorators import admin_required, student_required
from .navigation import ADMIN_TABS, STUDENT_TABS, pick_tab

SIGN_IN_MESSAGE = "You need to sign in to access this area."
NO_ACCESS_MESSAGE = "You do not have access to this area."

STUDENT_PANELS = {
    "courses": courses_panel,
    "enrollments": enrollment_panel,
    "results": results_panel,
    "announcements": announcements_panel,
    "attendance": student_calendar_panel,
}

# Enrollments and results have their own admin pages with filters.
ADMIN_PANELS = {
    "courses": courses_panel,
    "announcements": announcements_panel,
    "students": students_panel,
    "settings": settings_panel,
}


def access_denied(request):
    return render(
        request,
        "accounts/access_denied.html",
        {
            "message": NO_ACCESS_MESSAGE if request.user.is_authenticated else SIGN_IN_MESSAGE,
            "next": request.GET.get("next", ""),
            "active_nav": None,
        },
    )


@student_required
def student_dashboard(request):
    tab = pick_tab(request, STUDENT_TABS)
    ctx = {
        "tab": tab,
        "tabs": STUDENT_TABS,
        "profile": load(request, service.get_caller_student_profile, request.user.principal),
        "active_nav": "student",
    }
    ctx.update(STUDENT_PANELS[tab](request))
    return render(request, "accounts/student_dashboard.html", ctx)


@admin_required
def admin_dashboard(request):
    tab = pick_tab(request, ADMIN_TABS)
    caller = request.user.principal
    ctx = {
        "tab": tab,
        "tabs": ADMIN_TABS,
        "stats": {
            "courses": len(load(request, service.get_all_courses, caller, default=list)),
            "announcements": len(load(request, service.get_all_announcements, caller, default=list)),
            "students": len(load(request, service.get_all_student_profiles, caller, default=list)),
        },
        "active_nav": "admin",
    }
    panel = ADMIN_PANELS.get(tab)
    if panel is not None:
        ctx.update(panel(request))
    return render(request, "accounts/admin_dashboard.html", ctx)
