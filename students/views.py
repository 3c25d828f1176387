import logging

from django.contrib.auth.decorators import login_required
from django.http import Http404, HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required, student_required
from accounts.navigation import admin_tab_url
from accounts.roles import Role
from backend import service
from backend.feedback import flash_form_errors, load, submit
from backend.types import UserRole
from content.images import image_content_type
from .forms import RoleAssignmentForm, StudentProfileForm

logger = logging.getLogger(__name__)


@login_required
def setup(request):
    if getattr(request, "role", None) != Role.STUDENT:
        return redirect("student_dashboard")
    caller = request.user.principal
    if request.method == "POST":
        form = StudentProfileForm(request.POST, request.FILES)
        if form.is_valid():
            ok = submit(
                request,
                service.create_student_profile,
                caller,
                form.to_profile(),
                success="Profile created successfully!",
                failure="Failed to create profile",
            )
            if ok:
                return redirect("student_dashboard")
        else:
            flash_form_errors(request, form)
    else:
        if load(request, service.get_caller_student_profile, caller) is not None:
            return redirect("student_dashboard")
        form = StudentProfileForm(initial={"name": request.user.get_full_name()})
    return render(request, "students/setup.html", {"form": form, "active_nav": None})


@student_required
def profile(request):
    st = load(request, service.get_caller_student_profile, request.user.principal)
    return render(
        request,
        "students/profile.html",
        {"profile": st, "active_nav": "profile"},
    )


def _photo_response(st):
    if st is None or not st.profile_photo:
        raise Http404("No photo")
    response = HttpResponse(st.profile_photo, content_type=image_content_type(st.profile_photo))
    response["Cache-Control"] = "private, max-age=60"
    return response


@student_required
def own_photo(request):
    return _photo_response(load(request, service.get_caller_student_profile, request.user.principal))


@admin_required
def student_photo(request, principal):
    return _photo_response(load(request, service.get_student_profile, request.user.principal, principal))


@admin_required
def edit_student(request, principal):
    caller = request.user.principal
    current = load(request, service.get_student_profile, caller, principal)
    if current is None:
        raise Http404("Student not found")
    if request.method == "POST":
        form = StudentProfileForm(request.POST, request.FILES, existing_photo=current.profile_photo)
        if form.is_valid():
            ok = submit(
                request,
                service.update_student_profile,
                caller,
                principal,
                form.to_profile(),
                success="Student profile updated successfully!",
                failure="Failed to update student profile",
            )
            if ok:
                return redirect(admin_tab_url("students"))
        else:
            flash_form_errors(request, form)
    else:
        form = StudentProfileForm(
            initial=StudentProfileForm.initial_for(current),
            existing_photo=current.profile_photo,
        )
    role = load(request, service.get_user_role, caller, principal)
    return render(
        request,
        "students/edit.html",
        {
            "form": form,
            "student": current,
            "principal": principal,
            "role": role,
            "role_form": RoleAssignmentForm(initial={"principal": principal}),
            "active_nav": "admin",
        },
    )


@admin_required
@require_POST
def assign_role(request):
    form = RoleAssignmentForm(request.POST)
    if not form.is_valid():
        flash_form_errors(request, form)
        return redirect(admin_tab_url("students"))
    principal = form.cleaned_data["principal"]
    ok = submit(
        request,
        service.assign_caller_user_role,
        request.user.principal,
        principal,
        UserRole(form.cleaned_data["role"]),
        success="Role updated",
        failure="Failed to update role",
    )
    if ok:
        logger.info("Role of %s set to %s by user %s", principal, form.cleaned_data["role"], request.user.pk)
    return redirect("students:edit", principal=principal)
