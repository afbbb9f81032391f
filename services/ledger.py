"""Django ORM implementation of the Ledger protocol."""

import logging

from django.db.models import Count, Q, Sum

from crossshop.models import EntryStatus, LedgerEntry
from crossshop.protocols.ledger import (
    LedgerEvent,
    RedemptionEvent,
    ShopRedemptionTotals,
    VerificationEvent,
    VerificationSummary,
)

logger = logging.getLogger(__name__)

_EVENT_TYPES = {
    VerificationEvent.entry_type: VerificationEvent,
    RedemptionEvent.entry_type: RedemptionEvent,
}


def to_event(entry: LedgerEntry) -> LedgerEvent:
    """Rebuild the typed event from a ledger row."""
    return _EVENT_TYPES[entry.entry_type].from_entry(entry)


class DjangoLedger:
    """Ledger backed by the LedgerEntry table."""

    def append(self, event: LedgerEvent) -> LedgerEntry:
        return LedgerEntry.objects.create(**event.to_entry_fields())

    def query(
        self,
        *,
        entry_type: str | None = None,
        customer_address: str | None = None,
        shop_id: str | None = None,
        limit: int | None = None,
    ) -> list[LedgerEvent]:
        qs = LedgerEntry.objects.all()
        if entry_type:
            qs = qs.filter(entry_type=entry_type)
        if customer_address:
            qs = qs.for_customer(customer_address)
        if shop_id:
            qs = qs.for_shop(shop_id)
        qs = qs.newest_first()
        if limit is not None:
            qs = qs[:limit]
        return [to_event(entry) for entry in qs]

    def verification_summary(self, shop_id: str) -> VerificationSummary:
        counts = LedgerEntry.objects.verifications().for_shop(shop_id).aggregate(
            approved=Count("id", filter=Q(status=EntryStatus.COMPLETED)),
            denied=Count("id", filter=Q(status=EntryStatus.FAILED)),
        )
        return VerificationSummary(
            approved=counts["approved"] or 0,
            denied=counts["denied"] or 0,
        )

    def redemption_totals(self, shop_id: str | None = None) -> list[ShopRedemptionTotals]:
        qs = LedgerEntry.objects.cross_shop_redemptions()
        if shop_id:
            qs = qs.for_shop(shop_id)
        rows = (
            qs.order_by()
            .values("shop_id")
            .annotate(count=Count("id"), total_value=Sum("amount"))
            .order_by("-total_value", "shop_id")
        )
        return [
            ShopRedemptionTotals(
                shop_id=row["shop_id"],
                count=row["count"],
                total_value=row["total_value"] or 0,
            )
            for row in rows
        ]
