from .roles import Role, resolve_session_role


class RoleMiddleware:
    """Attach the caller's Role to request.role.

    Anonymous visitors are guests; for signed-in users the role comes from
    the backend and is None while it cannot be loaded.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        user = getattr(request, "user", None)
        if user and user.is_authenticated:
            request.role = resolve_session_role(request)
        else:
            request.role = Role.GUEST
        return self.get_response(request)
