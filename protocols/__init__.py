"""Cross-shop protocols."""

from crossshop.protocols.stores import (
    CustomerRecord,
    CustomerStore,
    ShopRecord,
    ShopStore,
)
from crossshop.protocols.ledger import (
    Ledger,
    LedgerEvent,
    RedemptionEvent,
    ShopRedemptionTotals,
    VerificationEvent,
    VerificationSummary,
)

__all__ = [
    # Stores
    "CustomerStore",
    "CustomerRecord",
    "ShopStore",
    "ShopRecord",
    # Ledger
    "Ledger",
    "LedgerEvent",
    "VerificationEvent",
    "RedemptionEvent",
    "VerificationSummary",
    "ShopRedemptionTotals",
]
