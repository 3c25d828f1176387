import logging
from urllib.parse import urlparse

from allauth.account.models import EmailAddress
from allauth.account.signals import user_logged_in
from django.conf import settings
from django.contrib.auth.signals import user_logged_out
from django.contrib.sites.models import Site
from django.db.models.signals import post_migrate
from django.dispatch import receiver

from backend.cache import query_cache
from backend.types import Principal
from .roles import forget_session_role

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def on_user_logged_in(sender, request, user, **kwargs):
    # A new session resolves the role afresh.
    forget_session_role(request)
    site = getattr(settings, "SITE_URL", "")
    if site.startswith("http://localhost:8000"):
        EmailAddress.objects.update_or_create(
            user=user,
            email=user.email,
            defaults={"verified": True, "primary": True},
        )
        EmailAddress.objects.filter(user=user).exclude(
            email=user.email
        ).update(primary=False)


@receiver(user_logged_out)
def on_user_logged_out(sender, request, user, **kwargs):
    if user is None:
        return
    query_cache.clear_principal(Principal(user.principal))
    logger.info("Cleared cached queries for user %s", user.pk)


@receiver(post_migrate)
def sync_site_domain(sender, **kwargs):
    site_url = getattr(settings, "SITE_URL", "")
    if not site_url:
        return
    try:
        parsed = urlparse(site_url)
        host = parsed.hostname or "example.com"
        sid = getattr(settings, "SITE_ID", 1)
        Site.objects.update_or_create(
            id=sid, defaults={"domain": host, "name": host}
        )
    except Exception:
        # Best-effort, don't block migrations
        logger.exception("Could not sync site domain from SITE_URL")
