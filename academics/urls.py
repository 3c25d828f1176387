from django.urls import path
from . import views

app_name = "academics"

urlpatterns = [
    path("student/enrollments/<int:course_id>/request/", views.request_enrollment, name="request_enrollment"),
    path("student/enrollments/<int:course_id>/renew/", views.request_renewal, name="request_renewal"),
    path("admin/courses/new/", views.course_create, name="course_create"),
    path("admin/courses/<int:course_id>/edit/", views.course_edit, name="course_edit"),
    path("admin/courses/<int:course_id>/delete/", views.course_delete, name="course_delete"),
    path("admin/enrollments/", views.enrollments, name="enrollments"),
    path("admin/enrollments/action/", views.enrollment_action, name="enrollment_action"),
    path("admin/results/", views.results, name="results"),
    path("admin/results/test/", views.create_test_result, name="create_test_result"),
    path("admin/results/daily/", views.post_daily_result, name="post_daily_result"),
]
