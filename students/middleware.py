import logging

from django.shortcuts import redirect
from django.urls import reverse

from accounts.roles import Role
from backend import service
from backend.client import BackendError, is_ready

logger = logging.getLogger(__name__)

EXEMPT_PREFIXES = ("/accounts/", "/static/", "/django-admin/")


class ProfileSetupMiddleware:
    """Hold students on the profile setup form until a profile exists."""

    def __init__(self, get_response):
        self.get_response = get_response

    def _exempt(self, path):
        if path.startswith(EXEMPT_PREFIXES):
            return True
        return path in (
            reverse("students:setup"),
            reverse("access_denied"),
            reverse("content:logo"),
        )

    def __call__(self, request):
        if (
            request.user.is_authenticated
            and getattr(request, "role", None) == Role.STUDENT
            and not self._exempt(request.path)
            and needs_profile_setup(request)
        ):
            return redirect("students:setup")
        return self.get_response(request)


def needs_profile_setup(request) -> bool:
    try:
        profile = service.get_caller_student_profile(request.user.principal)
    except BackendError as e:
        # Not loaded yet; let the page render rather than trap the user.
        logger.warning("Profile lookup failed for user %s: %s", request.user.pk, e.message)
        return False
    return profile is None and is_ready()
