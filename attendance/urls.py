from django.urls import path
from . import views

app_name = "attendance"

urlpatterns = [
    path("admin/students/<str:principal>/attendance/", views.student_calendar, name="student_calendar"),
]
