"""Balance resolution - lifetime earnings and the cross-shop cap."""

from dataclasses import dataclass
from decimal import Decimal

from django.utils import timezone

from crossshop.conf import crossshop_settings
from crossshop.gates import Gates
from crossshop.models import CrossShopVerification
from crossshop.protocols.stores import CustomerStore


@dataclass(frozen=True)
class CrossShopBalance:
    """Cross-shop breakdown of a customer's redeemable balance."""

    total_redeemable_balance: int
    cross_shop_limit: Decimal
    available_for_cross_shop: Decimal
    home_shop_balance: Decimal

    def as_dict(self) -> dict:
        return {
            "totalRedeemableBalance": self.total_redeemable_balance,
            "crossShopLimit": self.cross_shop_limit,
            "availableForCrossShop": self.available_for_cross_shop,
            "homeShopBalance": self.home_shop_balance,
        }


class BalanceResolver:
    """
    Reads lifetime earnings and derives the cross-shop cap.

    The cap is a share of lifetime earnings (tokens ever earned), not of the
    spendable wallet balance. Read-only: never writes the ledger.
    """

    def __init__(self, customers: CustomerStore, percent: Decimal | None = None):
        self.customers = customers
        self.percent = (
            Decimal(str(percent)) if percent is not None
            else crossshop_settings.CROSS_SHOP_LIMIT_PERCENT
        )

    def lifetime_earnings(self, address: str) -> int:
        """Lifetime earnings for the address; 0 if the customer is unknown."""
        customer = self.customers.get(address.lower())
        return customer.lifetime_earnings if customer else 0

    def cross_shop_cap(self, lifetime_earnings: int) -> Decimal:
        return Decimal(lifetime_earnings) * self.percent

    def committed(self, address: str, now=None) -> int:
        return CrossShopVerification.objects.committed_amount(address, now=now)

    def remaining(self, cap: Decimal, committed: int) -> Decimal:
        return max(Decimal(0), cap - committed)

    def balance(self, address: str) -> CrossShopBalance:
        """
        Cross-shop balance breakdown.

        Raises:
            GateError: If the address is malformed
        """
        Gates.address_format(address)
        lifetime = self.lifetime_earnings(address)
        cap = self.cross_shop_cap(lifetime)
        return CrossShopBalance(
            total_redeemable_balance=lifetime,
            cross_shop_limit=cap,
            available_for_cross_shop=self.remaining(cap, self.committed(address, timezone.now())),
            home_shop_balance=Decimal(lifetime) - cap,
        )
