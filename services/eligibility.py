"""Shop eligibility for cross-shop redemptions."""

from dataclasses import dataclass

from crossshop.models import DenialReason
from crossshop.protocols.stores import ShopRecord, ShopStore


@dataclass(frozen=True)
class Eligibility:
    eligible: bool
    shop: ShopRecord | None = None
    denial_code: str = ""
    denial_reason: str = ""


class ShopEligibilityChecker:
    """Checks, in order: shop exists, shop is active, shop accepts cross-shop."""

    def __init__(self, shops: ShopStore):
        self.shops = shops

    def check(self, shop_id: str) -> Eligibility:
        shop = self.shops.get(shop_id)

        if shop is None:
            return Eligibility(
                False,
                denial_code=DenialReason.SHOP_NOT_FOUND,
                denial_reason=f"Redemption shop not found: {shop_id}",
            )
        if not shop.active:
            return Eligibility(
                False,
                shop=shop,
                denial_code=DenialReason.SHOP_NOT_ACTIVE,
                denial_reason=f"Redemption shop is not active: {shop_id}",
            )
        if not shop.cross_shop_enabled:
            return Eligibility(
                False,
                shop=shop,
                denial_code=DenialReason.SHOP_CROSS_SHOP_DISABLED,
                denial_reason=f"Shop does not accept cross-shop redemptions: {shop.name or shop_id}",
            )

        return Eligibility(True, shop=shop)
