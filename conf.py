"""
Cross-shop configuration.

Usage in settings.py:
    CROSSSHOP = {
        "CROSS_SHOP_LIMIT_PERCENT": Decimal("0.20"),
        "VERIFICATION_TTL_MINUTES": 30,
        "CUSTOMER_STORE_BACKEND": "crossshop.adapters.sql.SqlCustomerStore",
        "SHOP_STORE_BACKEND": "crossshop.adapters.sql.SqlShopStore",
    }
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from django.conf import settings


@dataclass
class CrossShopSettings:
    """Cross-shop configuration settings."""

    # Share of lifetime earnings redeemable outside the earning shop
    CROSS_SHOP_LIMIT_PERCENT: Decimal = Decimal("0.20")

    # Per-request ceiling (RCN)
    MAX_REQUEST_AMOUNT: int = 1000

    # History paging
    HISTORY_DEFAULT_LIMIT: int = 50
    HISTORY_MAX_LIMIT: int = 500

    # Network stats ranking size
    TOP_SHOPS_LIMIT: int = 5

    # Approved verifications stop holding allowance after this (0 = never)
    VERIFICATION_TTL_MINUTES: int = 30

    # Store backends (dotted paths)
    CUSTOMER_STORE_BACKEND: str = "crossshop.adapters.sql.SqlCustomerStore"
    SHOP_STORE_BACKEND: str = "crossshop.adapters.sql.SqlShopStore"

    # SQL adapter
    SQL_DATABASE_ALIAS: str = "default"
    SQL_CUSTOMERS_TABLE: str = "customers"
    SQL_SHOPS_TABLE: str = "shops"

    def __post_init__(self):
        self.CROSS_SHOP_LIMIT_PERCENT = Decimal(str(self.CROSS_SHOP_LIMIT_PERCENT))


def get_crossshop_settings() -> CrossShopSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "CROSSSHOP", {})
    return CrossShopSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_crossshop_settings(), name)


crossshop_settings = _LazySettings()
