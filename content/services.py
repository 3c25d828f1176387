from backend import service
from backend.feedback import load
from .forms import ContactDetailsForm, LogoForm

DEFAULT_CONTACT = {
    "email": "info@tuitioncenter.com",
    "phone": "123-456-7890",
    "address": "123 Tuition Center Street, City, Country",
}

LANDING_ANNOUNCEMENTS = 3


def contact_details(request):
    """Contact details with the built-in defaults filling any blank field."""
    current = load(request, service.get_contact_details, _caller(request))
    contact = dict(DEFAULT_CONTACT)
    if current is not None:
        for key in contact:
            value = getattr(current, key)
            if value:
                contact[key] = value
    return contact


def _caller(request):
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return user.principal
    return None


def announcements_panel(request):
    announcements = load(request, service.get_all_announcements, _caller(request), default=list)
    return {"announcements": sorted(announcements, key=lambda a: a.date, reverse=True)}


def landing_context(request):
    caller = _caller(request)
    announcements = announcements_panel(request)["announcements"]
    return {
        "courses": load(request, service.get_all_courses, caller, default=list),
        "announcements": announcements[:LANDING_ANNOUNCEMENTS],
        "has_logo": bool(load(request, service.get_logo, caller, default=bytes)),
        "contact": contact_details(request),
    }


def settings_panel(request):
    return {
        "contact_form": ContactDetailsForm(initial=contact_details(request)),
        "logo_form": LogoForm(),
        "has_logo": bool(load(request, service.get_logo, _caller(request), default=bytes)),
    }
