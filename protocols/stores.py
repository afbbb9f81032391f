"""Customer and shop store protocols (owned by other subsystems, read-only here)."""

from dataclasses import dataclass
from typing import Iterable, Protocol, runtime_checkable


@dataclass(frozen=True)
class CustomerRecord:
    """Customer as seen by the cross-shop engine."""

    address: str
    lifetime_earnings: int  # RCN ever earned from completed services; never decreases


@dataclass(frozen=True)
class ShopRecord:
    """Shop as seen by the cross-shop engine."""

    shop_id: str
    name: str
    active: bool
    cross_shop_enabled: bool


@runtime_checkable
class CustomerStore(Protocol):
    """
    Protocol for reading customer earnings.

    Configuration in settings.py:
        CROSSSHOP = {
            "CUSTOMER_STORE_BACKEND": "crossshop.adapters.sql.SqlCustomerStore",
        }
    """

    def get(self, address: str) -> CustomerRecord | None:
        """Return the customer for a (case-insensitive) address, or None."""
        ...

    def iter_earning_customers(self) -> Iterable[CustomerRecord]:
        """Yield every customer with lifetime_earnings > 0."""
        ...


@runtime_checkable
class ShopStore(Protocol):
    """
    Protocol for reading shop eligibility.

    Configuration in settings.py:
        CROSSSHOP = {
            "SHOP_STORE_BACKEND": "crossshop.adapters.sql.SqlShopStore",
        }
    """

    def get(self, shop_id: str) -> ShopRecord | None:
        """Return the shop or None if it does not exist."""
        ...
