import logging

from django.core.management.base import BaseCommand

from accounts.models import User
from backend.cache import query_cache
from backend.types import Principal

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Drops cached backend query results, for everyone or for one user."

    def add_arguments(self, parser):
        parser.add_argument("--email", help="Only clear entries scoped to this user.")
        parser.add_argument(
            "--prefix",
            nargs="+",
            help="Only clear one query family, e.g. --prefix courses",
        )

    def handle(self, *args, **options):
        email = options.get("email")
        prefix = options.get("prefix")
        if email:
            user = User.objects.filter(email__iexact=email).first()
            if user is None:
                self.stdout.write(self.style.ERROR(f"No user with email {email}."))
                return
            query_cache.clear_principal(Principal(user.principal))
            logger.info("Cleared cached queries for user %s", user.pk)
            self.stdout.write(self.style.SUCCESS(f"Cleared cached queries for {email}."))
            return
        if prefix:
            query_cache.invalidate(*prefix)
            self.stdout.write(self.style.SUCCESS(f"Cleared cached queries under {' '.join(prefix)}."))
            return
        query_cache.clear()
        self.stdout.write(self.style.SUCCESS("Cleared all cached queries."))
