"""Management command to print cross-shop statistics as JSON."""

import json

from django.core.management.base import BaseCommand
from django.core.serializers.json import DjangoJSONEncoder

from crossshop.service import CrossShopService


class Command(BaseCommand):
    help = "Print network-wide (or per-shop) cross-shop statistics as JSON"

    def add_arguments(self, parser):
        parser.add_argument(
            "--shop",
            default=None,
            help="Shop id; prints per-shop stats instead of network stats",
        )

    def handle(self, *args, **options):
        service = CrossShopService.from_settings()
        if options["shop"]:
            stats = service.shop_stats(options["shop"])
        else:
            stats = service.network_stats()
        self.stdout.write(json.dumps(stats.as_dict(), cls=DjangoJSONEncoder, indent=2))
