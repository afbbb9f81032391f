"""Management command to expire stale cross-shop approvals."""

from django.core.management.base import BaseCommand

from crossshop.models import CrossShopVerification


class Command(BaseCommand):
    help = "Mark approved cross-shop verifications past their expiry as expired"

    def handle(self, *args, **options):
        expired = CrossShopVerification.expire_stale()
        self.stdout.write(
            self.style.SUCCESS(f"Expired {expired} cross-shop verifications.")
        )
