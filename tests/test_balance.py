"""Cross-shop balance projection."""

from decimal import Decimal

import pytest

from conftest import ADDRESS, UNKNOWN_ADDRESS
from crossshop.gates import GateError
from crossshop.models import LedgerEntry

pytestmark = pytest.mark.django_db


class TestCrossShopBalance:
    def test_breakdown(self, service):
        balance = service.balance(ADDRESS)

        assert balance.total_redeemable_balance == 500
        assert balance.cross_shop_limit == 100
        assert balance.home_shop_balance == 400
        assert balance.available_for_cross_shop == 100

    @pytest.mark.parametrize("lifetime", [0, 1, 7, 333, 500, 12345])
    def test_limit_plus_home_equals_total(self, service, customers, lifetime):
        address = "0x" + "5" * 40
        customers.set_earnings(address, lifetime)

        balance = service.balance(address)

        assert balance.cross_shop_limit + balance.home_shop_balance == balance.total_redeemable_balance

    def test_unknown_customer_is_zero(self, service):
        balance = service.balance(UNKNOWN_ADDRESS)

        assert balance.total_redeemable_balance == 0
        assert balance.cross_shop_limit == 0
        assert balance.available_for_cross_shop == 0

    def test_exact_decimal(self, service, customers):
        address = "0x" + "6" * 40
        customers.set_earnings(address, 7)

        balance = service.balance(address)

        assert balance.cross_shop_limit == Decimal("1.40")
        assert balance.home_shop_balance == Decimal("5.60")

    def test_approval_reduces_available(self, service, approved):
        balance = service.balance(ADDRESS)

        assert balance.cross_shop_limit == 100
        assert balance.available_for_cross_shop == 20

    def test_read_only(self, service):
        service.balance(ADDRESS)
        assert LedgerEntry.objects.count() == 0

    @pytest.mark.parametrize("address", ["0xnothex", ADDRESS + "\n"])
    def test_invalid_address(self, service, address):
        with pytest.raises(GateError):
            service.balance(address)

    def test_as_dict(self, service):
        data = service.balance(ADDRESS).as_dict()

        assert data == {
            "totalRedeemableBalance": 500,
            "crossShopLimit": Decimal("100.00"),
            "availableForCrossShop": Decimal("100.00"),
            "homeShopBalance": Decimal("400.00"),
        }
