"""
Cross-shop public API.

CORE (decisions):
    CrossShopService.verify(request)                  - Decide a cross-shop redemption
    CrossShopService.balance(address)                 - Cross-shop balance breakdown
    CrossShopService.process(verification_id, amount) - Consume an approved verification

QUERIES (ledger projections):
    CrossShopService.history(address, limit)  - Verification history, newest first
    CrossShopService.shop_stats(shop_id)      - Per-shop verification/redemption stats
    CrossShopService.network_stats()          - Network-wide cross-shop stats
"""

import logging
from decimal import Decimal

from django.utils.module_loading import import_string

from crossshop.conf import crossshop_settings
from crossshop.exceptions import CrossShopError
from crossshop.protocols.ledger import Ledger
from crossshop.protocols.stores import CustomerStore, ShopStore
from crossshop.services.audit import AuditRecorder
from crossshop.services.balance import BalanceResolver, CrossShopBalance
from crossshop.services.eligibility import ShopEligibilityChecker
from crossshop.services.ledger import DjangoLedger
from crossshop.services.redemption import RedemptionProcessor, RedemptionResult
from crossshop.services.statistics import (
    NetworkStats,
    ShopStats,
    StatisticsAggregator,
    VerificationHistory,
)
from crossshop.services.verification import (
    RedemptionRequest,
    RedemptionVerificationResult,
    VerificationDecisionEngine,
)

logger = logging.getLogger(__name__)


def _load_backend(setting_name: str):
    backend_path = getattr(crossshop_settings, setting_name)
    if not backend_path:
        raise CrossShopError("BACKEND_NOT_CONFIGURED", setting=setting_name)
    backend_class = import_string(backend_path)
    logger.debug("Loaded %s: %s", setting_name, backend_path)
    return backend_class()


class CrossShopService:
    """
    Cross-shop redemption engine, wired from explicit collaborators.

    Usage:
        service = CrossShopService(customers=customer_store, shops=shop_store)
        result = service.verify(RedemptionRequest("0x...", "shop-7", 80))

        # or with backends from settings.CROSSSHOP
        service = CrossShopService.from_settings()
    """

    def __init__(
        self,
        customers: CustomerStore,
        shops: ShopStore,
        ledger: Ledger | None = None,
        percent: Decimal | None = None,
        ttl_minutes: int | None = None,
    ):
        self.customers = customers
        self.shops = shops
        self.ledger = ledger or DjangoLedger()

        self.balances = BalanceResolver(customers, percent=percent)
        self.eligibility = ShopEligibilityChecker(shops)
        self.recorder = AuditRecorder(self.ledger)
        self.engine = VerificationDecisionEngine(
            self.balances,
            self.eligibility,
            self.recorder,
            ttl_minutes=ttl_minutes,
        )
        self.processor = RedemptionProcessor(self.ledger)
        self.statistics = StatisticsAggregator(
            self.ledger,
            customers,
            shops,
            percent=self.balances.percent,
        )

    @classmethod
    def from_settings(cls) -> "CrossShopService":
        """Build with CUSTOMER_STORE_BACKEND / SHOP_STORE_BACKEND from settings."""
        return cls(
            customers=_load_backend("CUSTOMER_STORE_BACKEND"),
            shops=_load_backend("SHOP_STORE_BACKEND"),
        )

    # ======================================================================
    # CORE API
    # ======================================================================

    def verify(self, request: RedemptionRequest | dict) -> RedemptionVerificationResult:
        if isinstance(request, dict):
            request = RedemptionRequest.from_payload(request)
        return self.engine.verify(request)

    def balance(self, customer_address: str) -> CrossShopBalance:
        return self.balances.balance(customer_address)

    def process(self, verification_id: str, actual_redemption_amount: int) -> RedemptionResult:
        return self.processor.process(verification_id, actual_redemption_amount)

    # ======================================================================
    # QUERIES
    # ======================================================================

    def history(self, customer_address: str, limit: int | None = None) -> VerificationHistory:
        return self.statistics.history(customer_address, limit)

    def shop_stats(self, shop_id: str) -> ShopStats:
        return self.statistics.shop_stats(shop_id)

    def network_stats(self) -> NetworkStats:
        return self.statistics.network_stats()
