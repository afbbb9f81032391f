"""LedgerEntry model - append-only audit trail and analytics source."""

from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from django.utils.translation import gettext_lazy as _

from crossshop.exceptions import CrossShopError


class EntryType(models.TextChoices):
    """Ledger entry types."""

    CROSS_SHOP_VERIFICATION = "cross_shop_verification", _("Cross-shop verification")
    REDEEM = "redeem", _("Redemption")


class EntryStatus(models.TextChoices):
    """Ledger entry status."""

    COMPLETED = "completed", _("Completed")
    FAILED = "failed", _("Failed")
    CONFIRMED = "confirmed", _("Confirmed")


class RedemptionType(models.TextChoices):
    CROSS_SHOP = "cross_shop", _("Cross-shop")


class LedgerEntryQuerySet(models.QuerySet):
    """Typed projections over the ledger. Bulk mutation is refused."""

    def verifications(self):
        return self.filter(entry_type=EntryType.CROSS_SHOP_VERIFICATION)

    def cross_shop_redemptions(self):
        """Executed cross-shop redemptions only."""
        return self.filter(
            entry_type=EntryType.REDEEM,
            redemption_type=RedemptionType.CROSS_SHOP,
            status=EntryStatus.CONFIRMED,
        )

    def for_customer(self, address: str):
        return self.filter(customer_address=address.lower())

    def for_shop(self, shop_id: str):
        return self.filter(shop_id=shop_id)

    def newest_first(self):
        return self.order_by("-created_at", "-id")

    def update(self, **kwargs):
        raise CrossShopError("LEDGER_IMMUTABLE", operation="update")

    def delete(self):
        raise CrossShopError("LEDGER_IMMUTABLE", operation="delete")


class LedgerEntry(models.Model):
    """
    Immutable ledger row.

    One row per verification decision (approved or denied) and one row per
    executed redemption. Rows are append-only: history and statistics are
    projections replayed from this table.

    The common columns mirror the marketplace transaction log
    (customer, shop, type, amount, reason, hash, status, metadata);
    ``redemption_type`` and ``verification_id`` are promoted out of the
    metadata payload so projections never filter on JSON paths.
    """

    entry_type = models.CharField(
        _("type"),
        max_length=30,
        choices=EntryType.choices,
        db_index=True,
    )
    customer_address = models.CharField(
        _("customer address"),
        max_length=42,
        db_index=True,
        help_text=_("Lower-cased 0x address"),
    )
    shop_id = models.CharField(_("shop"), max_length=100, db_index=True)
    amount = models.PositiveIntegerField(
        _("amount"),
        default=0,
        help_text=_("Whole RCN; 0 for denied verifications"),
    )
    reason = models.CharField(_("reason"), max_length=255, blank=True)
    transaction_hash = models.CharField(
        _("transaction hash"),
        max_length=100,
        unique=True,
    )
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=EntryStatus.choices,
    )
    redemption_type = models.CharField(
        _("redemption type"),
        max_length=20,
        choices=RedemptionType.choices,
        blank=True,
    )
    verification_id = models.CharField(
        _("verification"),
        max_length=64,
        blank=True,
        db_index=True,
    )
    metadata = models.JSONField(
        _("metadata"),
        default=dict,
        blank=True,
        encoder=DjangoJSONEncoder,
    )

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)

    objects = LedgerEntryQuerySet.as_manager()

    class Meta:
        db_table = "crossshop_ledger_entry"
        verbose_name = _("ledger entry")
        verbose_name_plural = _("ledger entries")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["customer_address", "-created_at"], name="crossshop_ledger_cust_idx"),
            models.Index(fields=["shop_id", "entry_type"], name="crossshop_ledger_shop_idx"),
        ]

    def __str__(self):
        return f"[{self.entry_type}] {self.transaction_hash} {self.amount} RCN ({self.status})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise CrossShopError("LEDGER_IMMUTABLE", operation="save", pk=self.pk)
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise CrossShopError("LEDGER_IMMUTABLE", operation="delete", pk=self.pk)
