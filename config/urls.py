from django.contrib import admin
from django.urls import include, path
from content import views as content_views

urlpatterns = [
    path("django-admin/", admin.site.urls),
    path("accounts/", include("allauth.urls")),
    path("", content_views.landing, name="landing"),
    # dashboards and access denied
    path("", include("accounts.urls")),
    # portal sections
    path("", include("students.urls")),
    path("", include("academics.urls")),
    path("", include("attendance.urls")),
    path("", include("content.urls")),
]
