"""
Input contract gates.

- G1 AddressFormat
- G2 ShopIdentity
- G3 RequestAmount
- G4 RedemptionInput
"""

import pytest

from crossshop.gates import GateError, Gates
from crossshop.services.verification import RedemptionRequest


# ═══════════════════════════════════════════════════════════════════
# G1: AddressFormat
# ═══════════════════════════════════════════════════════════════════


class TestG1AddressFormat:
    def test_valid_lowercase(self):
        assert Gates.address_format("0x" + "a" * 40).passed

    def test_valid_mixed_case(self):
        assert Gates.address_format("0xAbCdEf" + "0" * 34).passed

    @pytest.mark.parametrize(
        "address",
        [
            "invalid-address",
            "",
            None,
            "0x" + "a" * 39,
            "0x" + "a" * 41,
            "0x" + "g" * 40,
            "a" * 42,
            "0x" + "ab" * 20 + "\n",
        ],
    )
    def test_invalid_raises(self, address):
        with pytest.raises(GateError, match="G1_AddressFormat"):
            Gates.address_format(address)

    def test_check_returns_bool(self):
        assert Gates.check_address_format("0x" + "1" * 40) is True
        assert Gates.check_address_format("nope") is False


# ═══════════════════════════════════════════════════════════════════
# G2: ShopIdentity
# ═══════════════════════════════════════════════════════════════════


class TestG2ShopIdentity:
    def test_present(self):
        assert Gates.shop_identity("shop-1").passed

    @pytest.mark.parametrize("shop_id", ["", "   ", None])
    def test_blank_raises(self, shop_id):
        with pytest.raises(GateError, match="G2_ShopIdentity"):
            Gates.shop_identity(shop_id)


# ═══════════════════════════════════════════════════════════════════
# G3: RequestAmount
# ═══════════════════════════════════════════════════════════════════


class TestG3RequestAmount:
    @pytest.mark.parametrize("amount", [1, 80, 1000])
    def test_within_bounds(self, amount):
        assert Gates.request_amount(amount).passed

    @pytest.mark.parametrize("amount", [0, -5, 1001, 10.5, "80", None, True])
    def test_out_of_contract(self, amount):
        with pytest.raises(GateError, match="G3_RequestAmount"):
            Gates.request_amount(amount)

    def test_explicit_maximum(self):
        assert Gates.check_request_amount(50, maximum=50) is True
        assert Gates.check_request_amount(51, maximum=50) is False

    def test_maximum_from_settings(self, settings):
        settings.CROSSSHOP = {"MAX_REQUEST_AMOUNT": 10}
        with pytest.raises(GateError) as exc:
            Gates.request_amount(11)
        assert exc.value.details["maximum"] == 10


class TestRedemptionRequestGate:
    def test_first_violation_wins(self):
        request = RedemptionRequest("bad", "", 0)
        with pytest.raises(GateError) as exc:
            Gates.redemption_request(request)
        assert exc.value.gate_name == "G1_AddressFormat"

    def test_valid_request(self):
        request = RedemptionRequest("0x" + "a" * 40, "shop-1", 10)
        assert Gates.redemption_request(request).passed


# ═══════════════════════════════════════════════════════════════════
# G4: RedemptionInput
# ═══════════════════════════════════════════════════════════════════


class TestG4RedemptionInput:
    def test_valid(self):
        assert Gates.redemption_input("verify_abc", 10).passed

    @pytest.mark.parametrize(
        "verification_id, amount",
        [
            ("", 10),
            ("  ", 10),
            (None, 10),
            ("verify_abc", 0),
            ("verify_abc", -1),
            ("verify_abc", 2.5),
        ],
    )
    def test_invalid(self, verification_id, amount):
        with pytest.raises(GateError, match="G4_RedemptionInput"):
            Gates.redemption_input(verification_id, amount)
