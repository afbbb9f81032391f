"""
Redemption processing.

- Approved verification consumed exactly once
- Refusals: unknown, denied, consumed, expired, over verified amount
- Consumed amounts keep counting against the allowance
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from conftest import ADDRESS
from crossshop.gates import GateError
from crossshop.models import CrossShopVerification, LedgerEntry, VerificationStatus
from crossshop.signals import redemption_processed

pytestmark = pytest.mark.django_db


class TestProcessSuccess:
    def test_consumes_verification(self, service, approved):
        result = service.process(approved.verification_id, 80)

        assert result.success is True
        assert result.transaction_id == f"redemption_{approved.verification_id}"
        assert result.error_code is None

        verification = CrossShopVerification.objects.get(verification_id=approved.verification_id)
        assert verification.status == VerificationStatus.CONSUMED
        assert verification.consumed_amount == 80
        assert verification.consumed_at is not None

    def test_appends_confirmed_redeem_row(self, service, approved):
        service.process(approved.verification_id, 80)

        entry = LedgerEntry.objects.cross_shop_redemptions().get()
        assert entry.entry_type == "redeem"
        assert entry.status == "confirmed"
        assert entry.redemption_type == "cross_shop"
        assert entry.metadata["redemptionType"] == "cross_shop"
        assert entry.verification_id == approved.verification_id
        assert entry.amount == 80
        assert entry.shop_id == "shop-open"

    def test_partial_redemption(self, service, approved):
        result = service.process(approved.verification_id, 30)

        assert result.success is True
        assert LedgerEntry.objects.cross_shop_redemptions().get().amount == 30

    def test_signal_sent(self, service, approved, django_capture_on_commit_callbacks):
        received = []

        def handler(sender, verification, entry, **kwargs):
            received.append(entry.transaction_hash)

        redemption_processed.connect(handler)
        try:
            with django_capture_on_commit_callbacks(execute=True):
                result = service.process(approved.verification_id, 80)
        finally:
            redemption_processed.disconnect(handler)

        assert received == [result.transaction_id]

    def test_signal_waits_for_commit(self, service, approved, django_capture_on_commit_callbacks):
        received = []

        def handler(sender, entry, **kwargs):
            received.append(entry.transaction_hash)

        redemption_processed.connect(handler)
        try:
            with django_capture_on_commit_callbacks() as callbacks:
                result = service.process(approved.verification_id, 80)
            assert received == []

            for callback in callbacks:
                callback()
        finally:
            redemption_processed.disconnect(handler)

        assert received == [result.transaction_id]

    def test_refusal_sends_nothing(self, service, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            service.process("verify_doesnotexist", 10)

        assert callbacks == []

    def test_as_dict(self, service, approved):
        data = service.process(approved.verification_id, 80).as_dict()

        assert data["success"] is True
        assert data["transactionId"].startswith("redemption_verify_")
        assert "errorCode" not in data


class TestProcessRefusals:
    def test_second_consumption_refused(self, service, approved):
        service.process(approved.verification_id, 80)
        result = service.process(approved.verification_id, 80)

        assert result.success is False
        assert result.error_code == "VERIFICATION_ALREADY_CONSUMED"
        assert LedgerEntry.objects.cross_shop_redemptions().count() == 1

    def test_unknown_verification(self, service):
        result = service.process("verify_doesnotexist", 10)

        assert result.success is False
        assert result.error_code == "VERIFICATION_NOT_FOUND"
        assert result.transaction_id is None

    def test_denied_verification(self, service, request_factory):
        denied = service.verify(request_factory(50, shop_id="shop-closed"))

        result = service.process(denied.verification_id, 50)

        assert result.success is False
        assert result.error_code == "VERIFICATION_NOT_APPROVED"
        assert LedgerEntry.objects.cross_shop_redemptions().count() == 0

    def test_amount_above_verified(self, service, approved):
        result = service.process(approved.verification_id, 81)

        assert result.success is False
        assert result.error_code == "AMOUNT_EXCEEDS_VERIFIED"
        assert "81" in result.message
        verification = CrossShopVerification.objects.get(verification_id=approved.verification_id)
        assert verification.status == VerificationStatus.APPROVED

    def test_expired_verification(self, service, approved):
        CrossShopVerification.objects.filter(verification_id=approved.verification_id).update(
            expires_at=timezone.now() - timedelta(seconds=1)
        )

        result = service.process(approved.verification_id, 80)

        assert result.success is False
        assert result.error_code == "VERIFICATION_EXPIRED"
        verification = CrossShopVerification.objects.get(verification_id=approved.verification_id)
        assert verification.status == VerificationStatus.EXPIRED

    def test_existing_redeem_row_blocks_consumption(self, service, approved):
        """A redeem row already written for the verification wins the race."""
        LedgerEntry.objects.create(
            entry_type="redeem",
            customer_address=ADDRESS.lower(),
            shop_id="shop-open",
            amount=80,
            transaction_hash=f"redemption_{approved.verification_id}",
            status="confirmed",
            redemption_type="cross_shop",
            verification_id=approved.verification_id,
        )

        result = service.process(approved.verification_id, 80)

        assert result.success is False
        assert result.error_code == "VERIFICATION_ALREADY_CONSUMED"
        verification = CrossShopVerification.objects.get(verification_id=approved.verification_id)
        assert verification.status == VerificationStatus.APPROVED

    @pytest.mark.parametrize("amount", [0, -10, 12.5, "80"])
    def test_bad_amount_is_contract_violation(self, service, approved, amount):
        with pytest.raises(GateError, match="G4_RedemptionInput"):
            service.process(approved.verification_id, amount)

    def test_blank_id_is_contract_violation(self, service):
        with pytest.raises(GateError):
            service.process("", 10)


class TestConsumedAllowance:
    def test_consumed_amount_counts_against_cap(self, service, approved, request_factory):
        service.process(approved.verification_id, 80)

        over = service.verify(request_factory(30))
        exact = service.verify(request_factory(20))

        assert over.approved is False
        assert exact.approved is True

    def test_partial_consumption_frees_difference(self, service, approved, request_factory):
        service.process(approved.verification_id, 50)

        result = service.verify(request_factory(50))

        assert result.approved is True

    def test_balance_reflects_consumption(self, service, approved):
        service.process(approved.verification_id, 50)

        balance = service.balance(ADDRESS)
        assert balance.cross_shop_limit == 100
        assert balance.available_for_cross_shop == 50
