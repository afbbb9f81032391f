"""
CrossShopAllowance model - per-customer serialization point.

Every decision that reads or spends a customer's cross-shop allowance locks
this row first, so concurrent verify/process calls for the same address run
one at a time. Different addresses never contend.
"""

import logging

from django.db import IntegrityError, models, transaction
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)


class CrossShopAllowance(models.Model):
    customer_address = models.CharField(
        _("customer address"),
        max_length=42,
        unique=True,
    )
    decisions = models.PositiveIntegerField(
        _("decisions"),
        default=0,
        help_text=_("Verification decisions taken under this lock"),
    )
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "crossshop_allowance"
        verbose_name = _("cross-shop allowance")
        verbose_name_plural = _("cross-shop allowances")

    def __str__(self):
        return f"{self.customer_address} ({self.decisions} decisions)"

    @classmethod
    def lock(cls, customer_address: str) -> "CrossShopAllowance":
        """
        Fetch the customer's allowance row with a row-level lock.

        MUST be called inside transaction.atomic().

        The locking read comes first, so no plain read fixes the
        transaction snapshot before the lock is held.
        """
        address = customer_address.lower()
        allowance = cls.objects.select_for_update().filter(customer_address=address).first()
        if allowance is not None:
            return allowance

        try:
            with transaction.atomic():
                cls.objects.create(customer_address=address)
        except IntegrityError:
            logger.debug("Allowance row for %s created concurrently", address)
        return cls.objects.select_for_update().get(customer_address=address)
