"""
Verification decision engine.

verify(request) runs an ordered, short-circuiting pipeline:

    1. Input contract (Gates G1-G3)       -> GateError, nothing written
    2. Lifetime earnings (0 if unknown)
    3. Cap = lifetime * CROSS_SHOP_LIMIT_PERCENT
    4. requested > lifetime               -> deny INSUFFICIENT_BALANCE
    5. requested > remaining allowance    -> deny EXCEEDS_CROSS_SHOP_LIMIT
    6-8. shop exists / active / accepts   -> deny SHOP_*
    9. approve

Steps 2-9 run under the customer's allowance row lock, and the verification
state row plus its ledger row commit in the same transaction.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from crossshop.conf import crossshop_settings
from crossshop.gates import Gates
from crossshop.models import (
    CrossShopAllowance,
    CrossShopVerification,
    DenialReason,
    VerificationStatus,
)
from crossshop.protocols.ledger import VerificationEvent
from crossshop.services.audit import AuditRecorder
from crossshop.services.balance import BalanceResolver
from crossshop.services.eligibility import ShopEligibilityChecker
from crossshop.signals import verification_decided

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedemptionRequest:
    """Caller-supplied request; never persisted verbatim."""

    customer_address: str
    redemption_shop_id: str
    requested_amount: int
    purpose: str | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> "RedemptionRequest":
        """Build from the camelCase body used by the HTTP layer."""
        return cls(
            customer_address=payload.get("customerAddress"),
            redemption_shop_id=payload.get("redemptionShopId"),
            requested_amount=payload.get("requestedAmount"),
            purpose=payload.get("purpose"),
        )


@dataclass(frozen=True)
class RedemptionVerificationResult:
    """Decision returned to the caller. Balance figures are always present."""

    approved: bool
    available_balance: int
    max_cross_shop_amount: Decimal
    requested_amount: int
    verification_id: str
    message: str
    denial_reason: str | None = None
    denial_code: str | None = None
    available_for_cross_shop: Decimal | None = None

    def as_dict(self) -> dict:
        data = {
            "approved": self.approved,
            "availableBalance": self.available_balance,
            "maxCrossShopAmount": self.max_cross_shop_amount,
            "availableForCrossShop": self.available_for_cross_shop,
            "requestedAmount": self.requested_amount,
            "verificationId": self.verification_id,
            "message": self.message,
        }
        if self.denial_reason:
            data["denialReason"] = self.denial_reason
            data["denialCode"] = self.denial_code
        return data


def _percent_label(percent: Decimal) -> str:
    return f"{(percent * 100).normalize():f}%"


class VerificationDecisionEngine:
    def __init__(
        self,
        balances: BalanceResolver,
        eligibility: ShopEligibilityChecker,
        recorder: AuditRecorder,
        ttl_minutes: int | None = None,
    ):
        self.balances = balances
        self.eligibility = eligibility
        self.recorder = recorder
        self.ttl_minutes = (
            crossshop_settings.VERIFICATION_TTL_MINUTES if ttl_minutes is None else ttl_minutes
        )

    def verify(self, request: RedemptionRequest) -> RedemptionVerificationResult:
        """
        Decide a cross-shop redemption request.

        Business denials are normal returns (approved=False) and are
        ledgered exactly once, like approvals.

        Raises:
            GateError: If the request breaks the input contract
        """
        Gates.redemption_request(request)

        address = request.customer_address.lower()
        shop_id = request.redemption_shop_id.strip()
        logger.info(
            "Cross-shop verification request: %s at %s for %s RCN",
            address,
            shop_id,
            request.requested_amount,
        )

        try:
            with transaction.atomic():
                allowance = CrossShopAllowance.lock(address)
                now = timezone.now()

                lifetime = self.balances.lifetime_earnings(address)
                cap = self.balances.cross_shop_cap(lifetime)
                remaining = self.balances.remaining(cap, self.balances.committed(address, now))

                verification = CrossShopVerification.objects.create(
                    customer_address=address,
                    shop_id=shop_id,
                    requested_amount=request.requested_amount,
                    purpose=(request.purpose or "")[:200],
                    available_balance=lifetime,
                    max_cross_shop_amount=cap,
                )

                denial_code, denial_reason = self._evaluate(
                    request.requested_amount, shop_id, lifetime, remaining
                )
                self._decide(verification, denial_code, denial_reason, now)

                self.recorder.append(
                    VerificationEvent(
                        verification_id=verification.verification_id,
                        customer_address=address,
                        shop_id=shop_id,
                        requested_amount=request.requested_amount,
                        approved=not denial_code,
                        available_balance=lifetime,
                        max_cross_shop_amount=cap,
                        denial_code=denial_code,
                        denial_reason=denial_reason,
                        purpose=verification.purpose,
                    )
                )

                allowance.decisions = F("decisions") + 1
                allowance.save(update_fields=["decisions", "updated_at"])
        except Exception:
            logger.exception("Error verifying cross-shop redemption for %s", address)
            raise

        approved = not denial_code
        if approved:
            remaining -= request.requested_amount
        result = RedemptionVerificationResult(
            approved=approved,
            available_balance=lifetime,
            max_cross_shop_amount=cap,
            requested_amount=request.requested_amount,
            verification_id=verification.verification_id,
            message=(
                f"Cross-shop redemption approved for {request.requested_amount} RCN"
                if approved
                else f"Cross-shop redemption denied: {denial_reason}"
            ),
            denial_reason=denial_reason or None,
            denial_code=denial_code or None,
            available_for_cross_shop=remaining,
        )

        transaction.on_commit(
            lambda: verification_decided.send(
                sender=CrossShopVerification, verification=verification, result=result
            )
        )
        return result

    def _evaluate(
        self,
        requested: int,
        shop_id: str,
        lifetime: int,
        remaining: Decimal,
    ) -> tuple[str, str]:
        """Return (denial_code, denial_reason); empty strings mean approve."""
        if requested > lifetime:
            return (
                DenialReason.INSUFFICIENT_BALANCE,
                f"Insufficient redeemable balance. Available: {lifetime} RCN, "
                f"Requested: {requested} RCN",
            )

        # Equality is allowed: requesting exactly the remaining cap approves.
        if requested > remaining:
            return (
                DenialReason.EXCEEDS_CROSS_SHOP_LIMIT,
                f"Cross-shop redemption exceeds {_percent_label(self.balances.percent)} limit. "
                f"Maximum allowed: {remaining:.2f} RCN, Requested: {requested} RCN",
            )

        eligibility = self.eligibility.check(shop_id)
        if not eligibility.eligible:
            return eligibility.denial_code, eligibility.denial_reason

        return "", ""

    def _decide(self, verification, denial_code: str, denial_reason: str, now) -> None:
        status = VerificationStatus.DENIED if denial_code else VerificationStatus.APPROVED
        if not verification.can_transition(status):
            raise ValueError(f"Invalid transition {verification.status} -> {status}")

        verification.status = status
        verification.denial_code = denial_code
        verification.denial_reason = denial_reason[:255]
        if status == VerificationStatus.APPROVED and self.ttl_minutes:
            verification.expires_at = now + timedelta(minutes=self.ttl_minutes)
        verification.save(
            update_fields=["status", "denial_code", "denial_reason", "expires_at", "updated_at"]
        )
