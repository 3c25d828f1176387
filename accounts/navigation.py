from django.urls import reverse

STUDENT_TABS = ("courses", "enrollments", "results", "announcements", "attendance")
ADMIN_TABS = ("courses", "announcements", "students", "enrollments", "results", "settings")


def student_tab_url(tab):
    return f"{reverse('student_dashboard')}?tab={tab}"


def admin_tab_url(tab):
    return f"{reverse('admin_dashboard')}?tab={tab}"


def pick_tab(request, tabs):
    tab = request.GET.get("tab")
    return tab if tab in tabs else tabs[0]
