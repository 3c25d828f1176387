from functools import wraps
from urllib.parse import urlencode

from django.shortcuts import redirect, render
from django.urls import reverse

from .roles import Role

ADMIN_ONLY_MESSAGE = "This area is restricted to administrators only."


def redirect_to_access_denied(request):
    url = reverse("access_denied")
    return redirect(f"{url}?{urlencode({'next': request.get_full_path()})}")


def render_loading(request):
    return render(request, "accounts/loading.html", {"active_nav": None}, status=503)


def render_access_denied(request, message):
    return render(
        request,
        "accounts/access_denied.html",
        {"message": message, "active_nav": None},
        status=403,
    )


def role_required(*roles: Role, message: str = ADMIN_ONLY_MESSAGE):
    """
    Decorator to guard views by caller role.
    Guests are sent to the access-denied page, which offers sign-in; signed-in
    callers without one of `roles` see a restricted-access message instead.
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return redirect_to_access_denied(request)
            role = getattr(request, "role", None)
            if role is None:
                return render_loading(request)
            if role not in roles:
                return render_access_denied(request, message)
            return view_func(request, *args, **kwargs)
        return _wrapped
    return decorator


admin_required = role_required(Role.ADMIN)


def student_required(view_func):
    """Student pages, open to any signed-in caller.

    Admins are sent on to the admin dashboard. Guests get the pages with
    whatever the backend lets them see; only students are held for a profile.
    """
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if getattr(request, "role", None) == Role.ADMIN:
            return redirect("admin_dashboard")
        return view_func(request, *args, **kwargs)
    return role_required(Role.STUDENT, Role.GUEST, Role.ADMIN)(_wrapped)
