import time
import logging
import requests
import msal
from django.conf import settings
from django.core.cache import cache


TOKEN_CACHE_KEY = "backend_app_token"
logger = logging.getLogger(__name__)


class BackendError(Exception):
    """The backend rejected a call, or the call never reached it."""

    def __init__(self, method, message):
        super().__init__(message)
        self.method = method
        self.message = message


class BackendNotReady(BackendError):
    pass


class BackendAuthError(BackendError):
    pass


def is_ready() -> bool:
    return bool(getattr(settings, "BACKEND_URL", ""))


def _stored_token():
    entry = cache.get(TOKEN_CACHE_KEY)
    if entry and entry.get("expires_at", 0) > time.time() + 30:
        return entry["access_token"]
    return None


def _token_settings():
    missing = [
        name
        for name in ("BACKEND_AUTHORITY", "BACKEND_CLIENT_SECRET", "BACKEND_SCOPE")
        if not getattr(settings, name, "")
    ]
    if missing:
        logger.error("Backend token auth is missing %s", ", ".join(missing))
        raise BackendAuthError("token", f"Backend token settings missing: {', '.join(missing)}")
    return settings.BACKEND_AUTHORITY, settings.BACKEND_CLIENT_SECRET, settings.BACKEND_SCOPE


def get_app_token():
    """Client-credentials token for the backend, or None when token auth is off.

    Setting BACKEND_CLIENT_ID switches token auth on; BACKEND_AUTHORITY,
    BACKEND_CLIENT_SECRET and BACKEND_SCOPE are then required.
    """
    if not settings.BACKEND_CLIENT_ID:
        return None
    token = _stored_token()
    if token:
        return token
    authority, secret, scope = _token_settings()
    app = msal.ConfidentialClientApplication(
        client_id=settings.BACKEND_CLIENT_ID,
        client_credential=secret,
        authority=authority,
    )
    result = app.acquire_token_for_client(scopes=[scope])
    if "access_token" not in result:
        err = result.get("error")
        desc = result.get("error_description", "")
        logger.error("Backend token request failed: %s - %s", err, desc)
        raise BackendAuthError("token", f"Token request failed: {err}: {desc}")
    lifetime = int(result.get("expires_in", 300))
    cache.set(
        TOKEN_CACHE_KEY,
        {"access_token": result["access_token"], "expires_at": time.time() + lifetime - 30},
        lifetime,
    )
    return result["access_token"]


def _headers(caller=None):
    h = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    token = get_app_token()
    if token:
        h["Authorization"] = f"Bearer {token}"
    if caller:
        h["X-Caller-Principal"] = str(caller)
    return h


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"


def call(method: str, *args, caller=None):
    """Invoke one backend operation and return its decoded JSON result."""
    if not is_ready():
        raise BackendNotReady(method, "Backend connection is not ready")
    url = f"{settings.BACKEND_URL.rstrip('/')}/rpc/{method}"
    try:
        r = requests.post(
            url,
            headers=_headers(caller),
            json={"args": list(args)},
            timeout=settings.BACKEND_TIMEOUT_SECONDS,
        )
        r.raise_for_status()
    except requests.HTTPError as e:
        body = e.response.text if e.response is not None else ""
        logger.error(
            "Backend %s failed: %s %s",
            method,
            getattr(e.response, "status_code", ""),
            body[:500],
        )
        raise BackendError(method, _error_message(e.response)) from e
    except requests.RequestException as e:
        logger.error("Backend %s unreachable: %s", method, str(e))
        raise BackendError(method, "The server could not be reached") from e
    payload = r.json() if r.content else {}
    if isinstance(payload, dict) and payload.get("error"):
        logger.error("Backend %s rejected: %s", method, payload["error"])
        raise BackendError(method, str(payload["error"]))
    return payload.get("result") if isinstance(payload, dict) else None
