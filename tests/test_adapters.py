"""Store adapters and backend loading."""

import pytest
from django.db import DatabaseError, connection

from conftest import ADDRESS, OTHER_ADDRESS
from crossshop.adapters.memory import InMemoryCustomerStore, InMemoryShopStore
from crossshop.adapters.sql import SqlCustomerStore, SqlShopStore
from crossshop.exceptions import CrossShopError
from crossshop.protocols.stores import CustomerRecord, CustomerStore, ShopRecord, ShopStore
from crossshop.service import CrossShopService


# ═══════════════════════════════════════════════════════════════════
# In-memory
# ═══════════════════════════════════════════════════════════════════


class TestInMemoryStores:
    def test_customer_lookup_case_insensitive(self):
        store = InMemoryCustomerStore([CustomerRecord(address=ADDRESS, lifetime_earnings=500)])

        assert store.get(ADDRESS.upper().replace("0X", "0x")).lifetime_earnings == 500
        assert store.get(OTHER_ADDRESS) is None

    def test_iter_earning_customers_skips_zero(self):
        store = InMemoryCustomerStore()
        store.set_earnings(ADDRESS, 500)
        store.set_earnings(OTHER_ADDRESS, 0)

        assert [c.address for c in store.iter_earning_customers()] == [ADDRESS]

    def test_shop_lookup(self):
        store = InMemoryShopStore()
        store.put(ShopRecord(shop_id="s1", name="One", active=True, cross_shop_enabled=False))

        assert store.get("s1").cross_shop_enabled is False
        assert store.get("s2") is None

    def test_protocols(self):
        assert isinstance(InMemoryCustomerStore(), CustomerStore)
        assert isinstance(InMemoryShopStore(), ShopStore)


# ═══════════════════════════════════════════════════════════════════
# SQL
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def marketplace_tables(db):
    with connection.cursor() as cursor:
        cursor.execute(
            "CREATE TABLE customers (address VARCHAR(42) PRIMARY KEY, lifetime_earnings INTEGER)"
        )
        cursor.execute(
            "CREATE TABLE shops (shop_id VARCHAR(100) PRIMARY KEY, name VARCHAR(255), "
            "active BOOLEAN, cross_shop_enabled BOOLEAN)"
        )
        cursor.execute(
            "INSERT INTO customers VALUES (%s, %s), (%s, %s)",
            [ADDRESS.upper().replace("0X", "0x"), 500, OTHER_ADDRESS, 0],
        )
        cursor.execute(
            "INSERT INTO shops VALUES (%s, %s, %s, %s), (%s, %s, %s, %s)",
            ["shop-open", "Open Repairs", True, True, "shop-closed", None, False, True],
        )


class TestSqlStores:
    def test_customer_get(self, marketplace_tables):
        store = SqlCustomerStore()

        customer = store.get(ADDRESS)

        assert customer == CustomerRecord(address=ADDRESS, lifetime_earnings=500)

    def test_customer_missing(self, marketplace_tables):
        assert SqlCustomerStore().get("0x" + "9" * 40) is None

    def test_earning_customers(self, marketplace_tables):
        customers = SqlCustomerStore().iter_earning_customers()

        assert [c.address for c in customers] == [ADDRESS]

    def test_shop_get(self, marketplace_tables):
        store = SqlShopStore()

        assert store.get("shop-open") == ShopRecord(
            shop_id="shop-open", name="Open Repairs", active=True, cross_shop_enabled=True
        )
        assert store.get("shop-closed").name == ""
        assert store.get("shop-closed").active is False
        assert store.get("nope") is None

    def test_missing_table_propagates(self, db):
        with pytest.raises(DatabaseError):
            SqlShopStore(table="no_such_table").get("shop-open")

    def test_service_over_sql(self, marketplace_tables):
        service = CrossShopService(customers=SqlCustomerStore(), shops=SqlShopStore())

        result = service.verify(
            {"customerAddress": ADDRESS, "redemptionShopId": "shop-open", "requestedAmount": 100}
        )

        assert result.approved is True
        assert service.network_stats().network_utilization_rate == 0


# ═══════════════════════════════════════════════════════════════════
# Backend loading
# ═══════════════════════════════════════════════════════════════════


class TestFromSettings:
    def test_loads_configured_backends(self):
        service = CrossShopService.from_settings()

        assert isinstance(service.customers, InMemoryCustomerStore)
        assert isinstance(service.shops, InMemoryShopStore)

    def test_sql_backends_by_default(self, settings):
        settings.CROSSSHOP = {}

        service = CrossShopService.from_settings()

        assert isinstance(service.customers, SqlCustomerStore)
        assert service.customers.table == "customers"

    def test_empty_backend(self, settings):
        settings.CROSSSHOP = {"CUSTOMER_STORE_BACKEND": ""}

        with pytest.raises(CrossShopError) as exc:
            CrossShopService.from_settings()

        assert exc.value.code == "BACKEND_NOT_CONFIGURED"
        assert exc.value.data == {"setting": "CUSTOMER_STORE_BACKEND"}
