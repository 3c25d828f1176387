"""Turn backend outcomes into user-facing notifications."""
import logging

from django.contrib import messages

from .client import BackendError

logger = logging.getLogger(__name__)


def submit(request, mutation, *args, success: str, failure: str, **kwargs) -> bool:
    """Run a mutation and flash the outcome. Returns True on success."""
    try:
        mutation(*args, **kwargs)
    except BackendError as e:
        logger.error(
            "Backend %s failed for user %s: %s",
            e.method,
            getattr(request.user, "pk", None),
            e.message,
        )
        messages.error(request, e.message or failure)
        return False
    messages.success(request, success)
    return True


def load(request, query, *args, default=None, failure: str = "Could not load data", **kwargs):
    """Run a query for a page; a rejection becomes a message and the default."""
    try:
        return query(*args, **kwargs)
    except BackendError as e:
        logger.error(
            "Backend %s failed for user %s: %s",
            e.method,
            getattr(request.user, "pk", None),
            e.message,
        )
        messages.error(request, e.message or failure)
        return default() if callable(default) else default


def flash_form_errors(request, form):
    """Surface the first validation error as a notification."""
    for errors in form.errors.values():
        if errors:
            messages.error(request, errors[0])
            return
