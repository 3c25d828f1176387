from django.urls import path
from . import views

app_name = "students"

urlpatterns = [
    path("student/profile/", views.profile, name="profile"),
    path("student/profile/setup/", views.setup, name="setup"),
    path("student/profile/photo/", views.own_photo, name="own_photo"),
    path("admin/students/<str:principal>/edit/", views.edit_student, name="edit"),
    path("admin/students/<str:principal>/photo/", views.student_photo, name="photo"),
    path("admin/roles/", views.assign_role, name="assign_role"),
]
