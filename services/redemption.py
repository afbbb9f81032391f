"""Redemption processor - consumes an approved verification exactly once."""

import logging
from dataclasses import dataclass

from django.db import IntegrityError, transaction
from django.utils import timezone

from crossshop.exceptions import CrossShopError
from crossshop.gates import Gates
from crossshop.models import CrossShopAllowance, CrossShopVerification, VerificationStatus
from crossshop.protocols.ledger import Ledger, RedemptionEvent
from crossshop.signals import redemption_processed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedemptionResult:
    success: bool
    message: str
    transaction_id: str | None = None
    error_code: str | None = None

    def as_dict(self) -> dict:
        data = {"success": self.success, "message": self.message}
        if self.transaction_id:
            data["transactionId"] = self.transaction_id
        if self.error_code:
            data["errorCode"] = self.error_code
        return data


class RedemptionProcessor:
    """
    Finalizes a cross-shop redemption against its verification.

    Refuses (success=False, nothing written) when the verification is
    unknown, denied, already consumed, expired, or smaller than the amount
    being redeemed. On success the verification moves to ``consumed`` and a
    confirmed ``redeem`` row is appended to the ledger.
    """

    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    def process(self, verification_id: str, actual_amount: int) -> RedemptionResult:
        """
        Raises:
            GateError: If the id is blank or the amount is not a positive whole number
        """
        Gates.redemption_input(verification_id, actual_amount)
        verification_id = verification_id.strip()
        logger.info("Processing cross-shop redemption: %s for %s RCN", verification_id, actual_amount)

        try:
            with transaction.atomic():
                address = (
                    CrossShopVerification.objects.filter(verification_id=verification_id)
                    .values_list("customer_address", flat=True)
                    .first()
                )
                if address is None:
                    return self._refuse("VERIFICATION_NOT_FOUND", verification_id=verification_id)

                CrossShopAllowance.lock(address)
                verification = CrossShopVerification.objects.select_for_update().get(
                    verification_id=verification_id
                )

                refusal = self._check(verification, actual_amount)
                if refusal:
                    return refusal

                now = timezone.now()
                verification.status = VerificationStatus.CONSUMED
                verification.consumed_amount = actual_amount
                verification.consumed_at = now
                verification.save(
                    update_fields=["status", "consumed_amount", "consumed_at", "updated_at"]
                )

                entry = self.ledger.append(
                    RedemptionEvent(
                        verification_id=verification.verification_id,
                        customer_address=verification.customer_address,
                        shop_id=verification.shop_id,
                        amount=actual_amount,
                    )
                )
        except IntegrityError:
            # A redemption row for this verification already exists.
            return self._refuse("VERIFICATION_ALREADY_CONSUMED", verification_id=verification_id)
        except Exception:
            logger.exception("Error processing cross-shop redemption %s", verification_id)
            raise

        logger.info(
            "Cross-shop redemption confirmed: %s (%s RCN at %s)",
            entry.transaction_hash,
            actual_amount,
            verification.shop_id,
        )
        transaction.on_commit(
            lambda: redemption_processed.send(
                sender=CrossShopVerification, verification=verification, entry=entry
            )
        )
        return RedemptionResult(
            success=True,
            transaction_id=entry.transaction_hash,
            message=f"Cross-shop redemption processed successfully: {actual_amount} RCN",
        )

    def _check(self, verification: CrossShopVerification, actual_amount: int) -> RedemptionResult | None:
        if verification.status == VerificationStatus.CONSUMED:
            return self._refuse(
                "VERIFICATION_ALREADY_CONSUMED",
                verification_id=verification.verification_id,
                consumed_at=verification.consumed_at,
            )
        if verification.status == VerificationStatus.EXPIRED:
            return self._refuse("VERIFICATION_EXPIRED", verification_id=verification.verification_id)
        if verification.status != VerificationStatus.APPROVED:
            return self._refuse(
                "VERIFICATION_NOT_APPROVED",
                verification_id=verification.verification_id,
                status=verification.status,
            )
        if verification.is_expired():
            verification.status = VerificationStatus.EXPIRED
            verification.save(update_fields=["status", "updated_at"])
            return self._refuse("VERIFICATION_EXPIRED", verification_id=verification.verification_id)
        if actual_amount > verification.requested_amount:
            return self._refuse(
                "AMOUNT_EXCEEDS_VERIFIED",
                message=(
                    f"Redemption amount {actual_amount} RCN exceeds verified amount "
                    f"{verification.requested_amount} RCN"
                ),
                verification_id=verification.verification_id,
            )
        return None

    def _refuse(self, code: str, message: str | None = None, **data) -> RedemptionResult:
        error = CrossShopError(code, message=message, **data)
        logger.warning("Cross-shop redemption refused: %s", error)
        return RedemptionResult(success=False, message=error.message, error_code=error.code)
