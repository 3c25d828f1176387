from allauth.account.adapter import DefaultAccountAdapter
from django.conf import settings
from django.urls import reverse


class PortalAccountAdapter(DefaultAccountAdapter):
    def is_email_verified(self, request, email):
        site = getattr(settings, "SITE_URL", "")
        if site.startswith("http://localhost:8000"):
            return True
        return super().is_email_verified(request, email)

    def get_login_redirect_url(self, request):
        # The dashboard route sends admins on to the admin area.
        return reverse("student_dashboard")
