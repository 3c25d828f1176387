from datetime import datetime, timezone

from django import template

register = template.Library()

NANOS_PER_SECOND = 1_000_000_000


def _from_nanos(value):
    if value in (None, ""):
        return None
    try:
        return datetime.fromtimestamp(int(value) / NANOS_PER_SECOND, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


@register.filter
def ns_date(value, fmt="%b %d, %Y"):
    """Render a nanosecond timestamp as a calendar date."""
    moment = _from_nanos(value)
    return moment.strftime(fmt) if moment else ""


@register.filter
def ns_datetime(value):
    moment = _from_nanos(value)
    return moment.strftime("%b %d, %Y %H:%M") if moment else ""


@register.filter
def get_item(mapping, key):
    return mapping.get(key) if mapping else None
