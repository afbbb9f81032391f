"""Cross-shop models.

- LedgerEntry: append-only decision and redemption log
- CrossShopVerification: verification lifecycle and consumption state
- CrossShopAllowance: per-customer lock row
"""

from crossshop.models.ledger import (
    EntryStatus,
    EntryType,
    LedgerEntry,
    RedemptionType,
)
from crossshop.models.verification import (
    CrossShopVerification,
    DenialReason,
    VerificationStatus,
)
from crossshop.models.allowance import CrossShopAllowance

__all__ = [
    # Ledger
    "LedgerEntry",
    "EntryType",
    "EntryStatus",
    "RedemptionType",
    # Verification state
    "CrossShopVerification",
    "VerificationStatus",
    "DenialReason",
    # Concurrency
    "CrossShopAllowance",
]
