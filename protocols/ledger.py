"""
Ledger protocol and typed ledger events.

LedgerEvent is a tagged union: each event class carries its ``entry_type``
tag, knows how to lay itself out as a ledger row and how to rebuild itself
from one.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Protocol, Union, runtime_checkable

VERIFICATION = "cross_shop_verification"
REDEEM = "redeem"


@dataclass(frozen=True)
class VerificationEvent:
    """A cross-shop verification decision (approved or denied)."""

    entry_type: ClassVar[str] = VERIFICATION

    verification_id: str
    customer_address: str
    shop_id: str
    requested_amount: int
    approved: bool
    available_balance: int
    max_cross_shop_amount: Decimal
    denial_code: str = ""
    denial_reason: str = ""
    purpose: str = ""
    created_at: datetime | None = None

    @property
    def transaction_hash(self) -> str:
        return f"verification_{self.verification_id}"

    def to_entry_fields(self) -> dict:
        return {
            "entry_type": self.entry_type,
            "customer_address": self.customer_address.lower(),
            "shop_id": self.shop_id,
            "amount": self.requested_amount if self.approved else 0,
            "reason": (
                f"Cross-shop verification approved: {self.requested_amount} RCN"
                if self.approved
                else self.denial_reason
            )[:255],
            "transaction_hash": self.transaction_hash,
            "status": "completed" if self.approved else "failed",
            "verification_id": self.verification_id,
            "metadata": {
                "verificationType": "cross_shop",
                "verificationId": self.verification_id,
                "redemptionShopId": self.shop_id,
                "requestedAmount": self.requested_amount,
                "approved": self.approved,
                "availableBalance": self.available_balance,
                "maxCrossShopAmount": str(self.max_cross_shop_amount),
                "denialCode": self.denial_code or None,
                "denialReason": self.denial_reason or None,
                "purpose": self.purpose or None,
            },
        }

    @classmethod
    def from_entry(cls, entry) -> "VerificationEvent":
        meta = entry.metadata or {}
        return cls(
            verification_id=entry.verification_id or meta.get("verificationId", ""),
            customer_address=entry.customer_address,
            shop_id=entry.shop_id,
            requested_amount=int(meta.get("requestedAmount", entry.amount)),
            approved=entry.status == "completed",
            available_balance=int(meta.get("availableBalance", 0)),
            max_cross_shop_amount=Decimal(str(meta.get("maxCrossShopAmount", "0"))),
            denial_code=meta.get("denialCode") or "",
            denial_reason=meta.get("denialReason") or "",
            purpose=meta.get("purpose") or "",
            created_at=entry.created_at,
        )


@dataclass(frozen=True)
class RedemptionEvent:
    """An executed cross-shop redemption consuming one verification."""

    entry_type: ClassVar[str] = REDEEM

    verification_id: str
    customer_address: str
    shop_id: str
    amount: int
    created_at: datetime | None = None

    @property
    def transaction_hash(self) -> str:
        return f"redemption_{self.verification_id}"

    def to_entry_fields(self) -> dict:
        return {
            "entry_type": self.entry_type,
            "customer_address": self.customer_address.lower(),
            "shop_id": self.shop_id,
            "amount": self.amount,
            "reason": f"Cross-shop redemption: {self.amount} RCN",
            "transaction_hash": self.transaction_hash,
            "status": "confirmed",
            "redemption_type": "cross_shop",
            "verification_id": self.verification_id,
            "metadata": {
                "redemptionType": "cross_shop",
                "verificationId": self.verification_id,
                "redemptionShopId": self.shop_id,
            },
        }

    @classmethod
    def from_entry(cls, entry) -> "RedemptionEvent":
        return cls(
            verification_id=entry.verification_id,
            customer_address=entry.customer_address,
            shop_id=entry.shop_id,
            amount=entry.amount,
            created_at=entry.created_at,
        )


LedgerEvent = Union[VerificationEvent, RedemptionEvent]


@dataclass(frozen=True)
class VerificationSummary:
    """Verification counts for one shop."""

    approved: int
    denied: int

    @property
    def total(self) -> int:
        return self.approved + self.denied


@dataclass(frozen=True)
class ShopRedemptionTotals:
    """Executed cross-shop redemption totals for one shop."""

    shop_id: str
    count: int
    total_value: int


@runtime_checkable
class Ledger(Protocol):
    """Append-only event log; audit trail and analytics source."""

    def append(self, event: LedgerEvent):
        """Persist one event as one ledger row and return the row."""
        ...

    def query(
        self,
        *,
        entry_type: str | None = None,
        customer_address: str | None = None,
        shop_id: str | None = None,
        limit: int | None = None,
    ) -> list[LedgerEvent]:
        """Return events newest first."""
        ...

    def verification_summary(self, shop_id: str) -> VerificationSummary:
        ...

    def redemption_totals(self, shop_id: str | None = None) -> list[ShopRedemptionTotals]:
        """Per-shop totals of confirmed cross-shop redemptions."""
        ...
