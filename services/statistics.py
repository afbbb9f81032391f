"""
Statistics aggregator - projections replayed from the ledger.

Verification counts (what was requested) and executed redemptions (what was
actually redeemed) come from different ledger rows and are never mixed.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from crossshop.conf import crossshop_settings
from crossshop.gates import Gates
from crossshop.protocols.ledger import Ledger, VerificationEvent
from crossshop.protocols.stores import CustomerStore, ShopStore


@dataclass(frozen=True)
class ShopStats:
    shop_id: str
    total_verification_requests: int
    approved_requests: int
    denied_requests: int
    approval_rate: float  # percent, 2 decimals
    total_cross_shop_redemptions: int
    total_redeemed_value: int
    average_redemption_amount: float

    def as_dict(self) -> dict:
        return {
            "shopId": self.shop_id,
            "totalVerificationRequests": self.total_verification_requests,
            "approvedRequests": self.approved_requests,
            "deniedRequests": self.denied_requests,
            "approvalRate": self.approval_rate,
            "totalCrossShopRedemptions": self.total_cross_shop_redemptions,
            "totalRedeemedValue": self.total_redeemed_value,
            "averageRedemptionAmount": self.average_redemption_amount,
        }


@dataclass(frozen=True)
class TopShop:
    shop_id: str
    shop_name: str
    total_redemptions: int
    total_value: int

    def as_dict(self) -> dict:
        return {
            "shopId": self.shop_id,
            "shopName": self.shop_name,
            "totalRedemptions": self.total_redemptions,
            "totalValue": self.total_value,
        }


@dataclass(frozen=True)
class NetworkStats:
    total_cross_shop_redemptions: int
    total_cross_shop_value: int
    participating_shops: int
    average_redemption_size: float
    network_utilization_rate: float  # percent of current cross-shop capacity
    top_cross_shop_shops: list[TopShop] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "totalCrossShopRedemptions": self.total_cross_shop_redemptions,
            "totalCrossShopValue": self.total_cross_shop_value,
            "participatingShops": self.participating_shops,
            "averageRedemptionSize": self.average_redemption_size,
            "networkUtilizationRate": self.network_utilization_rate,
            "topCrossShopShops": [shop.as_dict() for shop in self.top_cross_shop_shops],
        }


@dataclass(frozen=True)
class VerificationHistory:
    verifications: list[VerificationEvent]

    @property
    def count(self) -> int:
        return len(self.verifications)

    def as_dict(self) -> dict:
        return {
            "verifications": [
                {
                    "id": v.verification_id,
                    "customerAddress": v.customer_address,
                    "redemptionShopId": v.shop_id,
                    "requestedAmount": v.requested_amount,
                    "approved": v.approved,
                    "denialReason": v.denial_reason or None,
                    "timestamp": v.created_at,
                }
                for v in self.verifications
            ],
            "count": self.count,
        }


def _ratio(part, whole) -> float:
    """part / whole * 100 rounded to 2 decimals; 0 when whole is 0."""
    if not whole:
        return 0.0
    return round(float(Decimal(part) / Decimal(whole) * 100), 2)


def _average(total: int, count: int) -> float:
    return round(total / count, 2) if count else 0.0


class StatisticsAggregator:
    def __init__(
        self,
        ledger: Ledger,
        customers: CustomerStore,
        shops: ShopStore,
        percent: Decimal | None = None,
    ):
        self.ledger = ledger
        self.customers = customers
        self.shops = shops
        self.percent = (
            Decimal(str(percent)) if percent is not None
            else crossshop_settings.CROSS_SHOP_LIMIT_PERCENT
        )

    def shop_stats(self, shop_id: str) -> ShopStats:
        Gates.shop_identity(shop_id)
        shop_id = shop_id.strip()
        summary = self.ledger.verification_summary(shop_id)
        redemptions = self.ledger.redemption_totals(shop_id)
        count = sum(r.count for r in redemptions)
        value = sum(r.total_value for r in redemptions)

        return ShopStats(
            shop_id=shop_id,
            total_verification_requests=summary.total,
            approved_requests=summary.approved,
            denied_requests=summary.denied,
            approval_rate=_ratio(summary.approved, summary.total),
            total_cross_shop_redemptions=count,
            total_redeemed_value=value,
            average_redemption_amount=_average(value, count),
        )

    def network_stats(self, top: int | None = None) -> NetworkStats:
        """
        Network-wide executed cross-shop redemptions.

        Utilization compares redeemed value with today's capacity (the
        cross-shop cap summed over every customer with earnings), so it is a
        point-in-time figure, not a historical one.
        """
        top = top or crossshop_settings.TOP_SHOPS_LIMIT
        per_shop = self.ledger.redemption_totals()
        count = sum(r.count for r in per_shop)
        value = sum(r.total_value for r in per_shop)

        capacity = sum(
            (Decimal(c.lifetime_earnings) * self.percent for c in self.customers.iter_earning_customers()),
            Decimal(0),
        )

        return NetworkStats(
            total_cross_shop_redemptions=count,
            total_cross_shop_value=value,
            participating_shops=len(per_shop),
            average_redemption_size=_average(value, count),
            network_utilization_rate=_ratio(value, capacity),
            top_cross_shop_shops=[
                TopShop(
                    shop_id=r.shop_id,
                    shop_name=self._shop_name(r.shop_id),
                    total_redemptions=r.count,
                    total_value=r.total_value,
                )
                for r in per_shop[:top]
            ],
        )

    def history(self, customer_address: str, limit: int | None = None) -> VerificationHistory:
        """
        Verification decisions for a customer, newest first.

        A missing or non-positive limit falls back to HISTORY_DEFAULT_LIMIT;
        larger limits are capped at HISTORY_MAX_LIMIT.
        """
        Gates.address_format(customer_address)
        if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0:
            limit = crossshop_settings.HISTORY_DEFAULT_LIMIT
        limit = min(limit, crossshop_settings.HISTORY_MAX_LIMIT)

        events = self.ledger.query(
            entry_type=VerificationEvent.entry_type,
            customer_address=customer_address,
            limit=limit,
        )
        return VerificationHistory(verifications=events)

    def _shop_name(self, shop_id: str) -> str:
        shop = self.shops.get(shop_id)
        return shop.name if shop and shop.name else shop_id
