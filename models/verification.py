"""
CrossShopVerification model - explicit verification state.

pending -> approved | denied
approved -> consumed | expired
"""

import uuid

from django.db import models
from django.db.models import Q, Sum
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


def new_verification_id() -> str:
    return f"verify_{uuid.uuid4().hex}"


class VerificationStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    APPROVED = "approved", _("Approved")
    DENIED = "denied", _("Denied")
    CONSUMED = "consumed", _("Consumed")
    EXPIRED = "expired", _("Expired")


class DenialReason(models.TextChoices):
    """Fixed set of business denial reasons."""

    INSUFFICIENT_BALANCE = "insufficient_balance", _("Insufficient redeemable balance")
    EXCEEDS_CROSS_SHOP_LIMIT = "exceeds_cross_shop_limit", _("Exceeds cross-shop limit")
    SHOP_NOT_FOUND = "shop_not_found", _("Shop not found")
    SHOP_NOT_ACTIVE = "shop_not_active", _("Shop not active")
    SHOP_CROSS_SHOP_DISABLED = "shop_cross_shop_disabled", _(
        "Shop does not accept cross-shop redemptions"
    )


TRANSITIONS = {
    VerificationStatus.PENDING: {VerificationStatus.APPROVED, VerificationStatus.DENIED},
    VerificationStatus.APPROVED: {VerificationStatus.CONSUMED, VerificationStatus.EXPIRED},
    VerificationStatus.DENIED: set(),
    VerificationStatus.CONSUMED: set(),
    VerificationStatus.EXPIRED: set(),
}


class CrossShopVerificationQuerySet(models.QuerySet):
    def for_customer(self, address: str):
        return self.filter(customer_address=address.lower())

    def holding(self, now=None):
        """Approved verifications still reserving allowance."""
        now = now or timezone.now()
        return self.filter(status=VerificationStatus.APPROVED).filter(
            Q(expires_at__isnull=True) | Q(expires_at__gt=now)
        )

    def past_expiry(self, now=None):
        now = now or timezone.now()
        return self.filter(
            status=VerificationStatus.APPROVED,
            expires_at__isnull=False,
            expires_at__lte=now,
        )

    def committed_amount(self, address: str, now=None) -> int:
        """
        Cross-shop allowance already spoken for by this customer.

        Unexpired approvals count at their requested amount, consumed
        verifications at the amount actually redeemed.
        """
        qs = self.for_customer(address)
        held = qs.holding(now).aggregate(total=Sum("requested_amount"))["total"] or 0
        consumed = (
            qs.filter(status=VerificationStatus.CONSUMED)
            .aggregate(total=Sum("consumed_amount"))["total"]
            or 0
        )
        return held + consumed


class CrossShopVerification(models.Model):
    """
    One cross-shop verification decision and its consumption state.

    The ledger keeps the immutable record of the decision; this row tracks
    the mutable lifecycle (approval hold, consumption, expiry) so a
    verification can be consumed at most once.
    """

    verification_id = models.CharField(
        _("verification id"),
        max_length=64,
        unique=True,
        default=new_verification_id,
    )
    customer_address = models.CharField(_("customer address"), max_length=42, db_index=True)
    shop_id = models.CharField(_("redemption shop"), max_length=100, db_index=True)
    requested_amount = models.PositiveIntegerField(_("requested amount"))
    purpose = models.CharField(_("purpose"), max_length=200, blank=True)

    status = models.CharField(
        _("status"),
        max_length=20,
        choices=VerificationStatus.choices,
        default=VerificationStatus.PENDING,
        db_index=True,
    )
    denial_code = models.CharField(
        _("denial code"),
        max_length=40,
        choices=DenialReason.choices,
        blank=True,
    )
    denial_reason = models.CharField(_("denial reason"), max_length=255, blank=True)

    # Balance snapshot at decision time
    available_balance = models.PositiveIntegerField(_("available balance"), default=0)
    max_cross_shop_amount = models.DecimalField(
        _("max cross-shop amount"),
        max_digits=24,
        decimal_places=4,
        default=0,
    )

    # Consumption
    consumed_amount = models.PositiveIntegerField(_("consumed amount"), null=True, blank=True)
    consumed_at = models.DateTimeField(_("consumed at"), null=True, blank=True)
    expires_at = models.DateTimeField(_("expires at"), null=True, blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    objects = CrossShopVerificationQuerySet.as_manager()

    class Meta:
        db_table = "crossshop_verification"
        verbose_name = _("cross-shop verification")
        verbose_name_plural = _("cross-shop verifications")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["customer_address", "status"], name="crossshop_verif_cust_idx"),
        ]

    def __str__(self):
        return f"{self.verification_id}: {self.requested_amount} RCN @ {self.shop_id} ({self.status})"

    def can_transition(self, status: str) -> bool:
        return status in TRANSITIONS[VerificationStatus(self.status)]

    def is_expired(self, now=None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or timezone.now())

    @classmethod
    def expire_stale(cls, now=None) -> int:
        """Move approved verifications past expires_at to expired. Returns the count."""
        now = now or timezone.now()
        return cls.objects.past_expiry(now).update(
            status=VerificationStatus.EXPIRED,
            updated_at=now,
        )
