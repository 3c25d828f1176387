from django.urls import path
from . import views

app_name = "content"

urlpatterns = [
    path("logo/", views.logo, name="logo"),
    path("admin/announcements/new/", views.announcement_create, name="announcement_create"),
    path("admin/announcements/<int:announcement_id>/edit/", views.announcement_edit, name="announcement_edit"),
    path("admin/announcements/<int:announcement_id>/delete/", views.announcement_delete, name="announcement_delete"),
    path("admin/settings/contact/", views.update_contact, name="update_contact"),
    path("admin/settings/logo/", views.update_logo, name="update_logo"),
]
