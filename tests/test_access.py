"""Role resolution and role-gated routing."""
from unittest.mock import patch

from django.urls import reverse

from accounts.roles import SESSION_ROLE_CHECKED_KEY, SESSION_ROLE_KEY, Role, role_from_wire
from backend import service
from backend.cache import query_cache
from backend.client import BackendError
from backend.types import Principal, UserRole

from .conftest import MODEL_BACKEND, PROFILE_WIRE


def test_role_from_wire_maps_known_values():
    assert role_from_wire("Admin") is Role.ADMIN
    assert role_from_wire("user") is Role.STUDENT
    assert role_from_wire("Student") is Role.STUDENT
    assert role_from_wire("guest") is Role.GUEST


def test_unknown_role_is_guest():
    with patch("accounts.roles.logger") as log:
        assert role_from_wire("Teacher") is Role.GUEST
    log.warning.assert_called_once()


def test_anonymous_is_sent_to_access_denied(client, db):
    response = client.get("/student/")
    assert response.status_code == 302
    assert response["Location"] == f"{reverse('access_denied')}?next=%2Fstudent%2F"

    response = client.get("/admin/")
    assert response.status_code == 302
    assert response["Location"].startswith(reverse("access_denied"))


def test_access_denied_page_offers_sign_in(client, db):
    response = client.get("/access-denied/?next=/admin/")
    assert response.status_code == 200
    assert b"Sign In" in response.content
    assert b"?next=/admin/" in response.content


def test_student_cannot_open_admin_dashboard(student_client):
    response = student_client.get("/admin/")
    assert response.status_code == 403
    assert b"restricted to administrators" in response.content


def test_admin_visiting_student_route_goes_to_admin(admin_client):
    response = admin_client.get("/student/")
    assert response.status_code == 302
    assert response["Location"] == reverse("admin_dashboard")


def test_authenticated_guest_opens_student_dashboard(client, student_user, fake_backend):
    fake_backend.responses["getCallerRole"] = "Guest"
    fake_backend.responses["getCallerStudentProfile"] = None
    client.force_login(student_user, backend=MODEL_BACKEND)
    response = client.get("/student/")
    assert response.status_code == 200
    assert response.context["profile"] is None


def test_failed_role_lookup_renders_loading(client, student_user, fake_backend):
    fake_backend.responses["getCallerRole"] = BackendError("getCallerRole", "down")
    client.force_login(student_user, backend=MODEL_BACKEND)
    response = client.get("/admin/")
    assert response.status_code == 503
    assert b"Loading" in response.content


def test_role_is_resolved_once_per_lease(admin_client, fake_backend):
    admin_client.get("/admin/")
    admin_client.get("/admin/?tab=students")
    assert len(fake_backend.called("getCallerRole")) == 1
    assert admin_client.session[SESSION_ROLE_KEY] == "admin"


def test_demotion_reaches_open_session_when_lease_runs_out(admin_client, admin_user, fake_backend):
    assert admin_client.get("/admin/").status_code == 200

    fake_backend.responses["getCallerRole"] = "Student"
    fake_backend.responses["getCallerStudentProfile"] = PROFILE_WIRE
    service.assign_caller_user_role("root", admin_user.principal, UserRole.USER)
    assert admin_client.get("/admin/").status_code == 200

    session = admin_client.session
    session[SESSION_ROLE_CHECKED_KEY] -= 3600
    session.save()
    response = admin_client.get("/admin/")
    assert response.status_code == 403
    assert admin_client.session[SESSION_ROLE_KEY] == "student"
    assert len(fake_backend.called("getCallerRole")) == 2


def test_sign_out_clears_caller_scoped_queries(student_client, student_user):
    student_client.get("/student/")
    key = ("callerRole", Principal(student_user.principal))
    assert query_cache.get(key) == (True, "Student")

    student_client.logout()

    assert query_cache.get(key) == (False, None)
    assert SESSION_ROLE_KEY not in student_client.session
