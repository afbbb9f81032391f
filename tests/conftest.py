"""Pytest fixtures for cross-shop tests."""

import pytest

from crossshop.adapters.memory import InMemoryCustomerStore, InMemoryShopStore
from crossshop.protocols.stores import CustomerRecord, ShopRecord
from crossshop.service import CrossShopService
from crossshop.services.verification import RedemptionRequest

ADDRESS = "0x" + "ab" * 20
OTHER_ADDRESS = "0x" + "cd" * 20
POOR_ADDRESS = "0x" + "ef" * 20
UNKNOWN_ADDRESS = "0x" + "12" * 20


@pytest.fixture
def customers():
    """Customer store: 500 RCN, 1000 RCN and 50 RCN lifetime earners."""
    return InMemoryCustomerStore([
        CustomerRecord(address=ADDRESS, lifetime_earnings=500),
        CustomerRecord(address=OTHER_ADDRESS, lifetime_earnings=1000),
        CustomerRecord(address=POOR_ADDRESS, lifetime_earnings=50),
    ])


@pytest.fixture
def shops():
    return InMemoryShopStore([
        ShopRecord(shop_id="shop-open", name="Open Repairs", active=True, cross_shop_enabled=True),
        ShopRecord(shop_id="shop-b", name="Fix-It B", active=True, cross_shop_enabled=True),
        ShopRecord(shop_id="shop-closed", name="Closed Garage", active=False, cross_shop_enabled=True),
        ShopRecord(shop_id="shop-home-only", name="Home Only Motors", active=True, cross_shop_enabled=False),
    ])


@pytest.fixture
def service(db, customers, shops):
    return CrossShopService(customers=customers, shops=shops)


@pytest.fixture
def request_factory():
    """Build a RedemptionRequest with sensible defaults."""

    def make(amount=80, shop_id="shop-open", address=ADDRESS, purpose=None):
        return RedemptionRequest(
            customer_address=address,
            redemption_shop_id=shop_id,
            requested_amount=amount,
            purpose=purpose,
        )

    return make


@pytest.fixture
def approved(service, request_factory):
    """An approved 80 RCN verification at shop-open."""
    result = service.verify(request_factory(80))
    assert result.approved
    return result
