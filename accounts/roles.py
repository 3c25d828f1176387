import logging
from enum import Enum

from django.conf import settings
from django.utils import timezone

from backend import service
from backend.client import BackendError

logger = logging.getLogger(__name__)

SESSION_ROLE_KEY = "portal_role"
SESSION_ROLE_CHECKED_KEY = "portal_role_checked_at"


class Role(str, Enum):
    ADMIN = "admin"
    STUDENT = "student"
    GUEST = "guest"


# Both the string role query and the UserRole enum land here.
_WIRE_ROLES = {
    "Admin": Role.ADMIN,
    "admin": Role.ADMIN,
    "Student": Role.STUDENT,
    "user": Role.STUDENT,
    "Guest": Role.GUEST,
    "guest": Role.GUEST,
}


def role_from_wire(value) -> Role:
    role = _WIRE_ROLES.get(str(value))
    if role is None:
        logger.warning("Unknown role %r from backend; treating as guest", value)
        return Role.GUEST
    return role


def _lease_expired(request) -> bool:
    checked = request.session.get(SESSION_ROLE_CHECKED_KEY)
    if checked is None:
        return True
    ttl = getattr(settings, "ROLE_LEASE_TTL_SECONDS", 300)
    return timezone.now().timestamp() - checked > ttl


def resolve_session_role(request):
    """Role of the signed-in caller, kept in the session for a short lease.

    When the lease runs out the role is looked up again, so a role change
    reaches an open session within ROLE_LEASE_TTL_SECONDS. Returns None while
    the role cannot be loaded (backend unreachable or not configured);
    callers treat that as "not loaded yet".
    """
    cached = request.session.get(SESSION_ROLE_KEY)
    if cached and not _lease_expired(request):
        try:
            return Role(cached)
        except ValueError:
            pass
    forget_session_role(request)
    try:
        raw = service.get_caller_role(request.user.principal)
    except BackendError as e:
        logger.warning("Role lookup failed for user %s: %s", request.user.pk, e.message)
        return None
    if raw is None:
        return None
    role = role_from_wire(raw)
    if cached and cached != role.value:
        logger.info("Role for user %s changed from %s to %s", request.user.pk, cached, role.value)
    request.session[SESSION_ROLE_KEY] = role.value
    request.session[SESSION_ROLE_CHECKED_KEY] = timezone.now().timestamp()
    return role


def forget_session_role(request):
    request.session.pop(SESSION_ROLE_KEY, None)
    request.session.pop(SESSION_ROLE_CHECKED_KEY, None)
