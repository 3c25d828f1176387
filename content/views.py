import logging

from django.http import Http404, HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST

from accounts.decorators import admin_required
from accounts.navigation import admin_tab_url
from backend import service
from backend.feedback import flash_form_errors, load, submit
from .forms import AnnouncementForm, ContactDetailsForm, LogoForm
from .images import image_content_type
from .services import landing_context

logger = logging.getLogger(__name__)


@require_GET
def landing(request):
    """Public landing page (no auth required)."""
    ctx = landing_context(request)
    ctx["active_nav"] = "home"
    return render(request, "content/landing.html", ctx)


@require_GET
def logo(request):
    data = load(request, service.get_logo, None, default=bytes)
    if not data:
        raise Http404("No logo")
    response = HttpResponse(data, content_type=image_content_type(data, default="image/png"))
    response["Cache-Control"] = "public, max-age=300"
    return response


def _find_announcement(request, announcement_id):
    for ann in load(request, service.get_all_announcements, request.user.principal, default=list):
        if ann.id == announcement_id:
            return ann
    raise Http404("Announcement not found")


@admin_required
def announcement_create(request):
    form = AnnouncementForm(request.POST or None)
    if request.method == "POST":
        if form.is_valid():
            d = form.cleaned_data
            ok = submit(
                request,
                service.create_announcement,
                request.user.principal,
                d["title"],
                d["message"],
                d["date"],
                success="Announcement created successfully!",
                failure="Failed to create announcement",
            )
            if ok:
                return redirect(admin_tab_url("announcements"))
        else:
            flash_form_errors(request, form)
    return render(
        request,
        "content/announcement_form.html",
        {"form": form, "announcement": None, "active_nav": "admin"},
    )


@admin_required
def announcement_edit(request, announcement_id: int):
    ann = _find_announcement(request, announcement_id)
    if request.method == "POST":
        form = AnnouncementForm(request.POST)
        if form.is_valid():
            d = form.cleaned_data
            ok = submit(
                request,
                service.update_announcement,
                request.user.principal,
                ann.id,
                d["title"],
                d["message"],
                d["date"],
                success="Announcement updated successfully!",
                failure="Failed to update announcement",
            )
            if ok:
                return redirect(admin_tab_url("announcements"))
        else:
            flash_form_errors(request, form)
    else:
        form = AnnouncementForm(initial={"title": ann.title, "message": ann.message, "date": ann.date})
    return render(
        request,
        "content/announcement_form.html",
        {"form": form, "announcement": ann, "active_nav": "admin"},
    )


@admin_required
@require_POST
def announcement_delete(request, announcement_id: int):
    submit(
        request,
        service.delete_announcement,
        request.user.principal,
        announcement_id,
        success="Announcement deleted",
        failure="Failed to delete announcement",
    )
    return redirect(admin_tab_url("announcements"))


@admin_required
@require_POST
def update_contact(request):
    form = ContactDetailsForm(request.POST)
    if form.is_valid():
        d = form.cleaned_data
        submit(
            request,
            service.update_contact_details,
            request.user.principal,
            d["email"],
            d["phone"],
            d["address"],
            success="Contact details updated successfully!",
            failure="Failed to update contact details",
        )
    else:
        flash_form_errors(request, form)
    return redirect(admin_tab_url("settings"))


@admin_required
@require_POST
def update_logo(request):
    form = LogoForm(request.POST, request.FILES)
    if form.is_valid():
        ok = submit(
            request,
            service.update_logo,
            request.user.principal,
            form.cleaned_data["logo"],
            success="Logo updated successfully!",
            failure="Failed to update logo",
        )
        if ok:
            logger.info("Site logo replaced by user %s", request.user.pk)
    else:
        flash_form_errors(request, form)
    return redirect(admin_tab_url("settings"))
