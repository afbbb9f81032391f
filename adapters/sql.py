"""
SQL CustomerStore / ShopStore adapters.

Read the marketplace ``customers`` and ``shops`` tables directly through
Django's database connections. Those tables are owned by the customer and
shop management subsystems; nothing here writes to them.

Configuration in settings.py:
    CROSSSHOP = {
        "CUSTOMER_STORE_BACKEND": "crossshop.adapters.sql.SqlCustomerStore",
        "SHOP_STORE_BACKEND": "crossshop.adapters.sql.SqlShopStore",
        "SQL_DATABASE_ALIAS": "marketplace",
        "SQL_CUSTOMERS_TABLE": "customers",
        "SQL_SHOPS_TABLE": "shops",
    }

Expected columns:
    customers(address, lifetime_earnings)
    shops(shop_id, name, active, cross_shop_enabled)
"""

import logging
from typing import Iterable

from django.db import connections

from crossshop.conf import crossshop_settings
from crossshop.protocols.stores import CustomerRecord, ShopRecord

logger = logging.getLogger(__name__)


class _SqlStore:
    def __init__(self, alias: str | None = None, table: str | None = None):
        self.alias = alias or crossshop_settings.SQL_DATABASE_ALIAS
        self.table = table or self.default_table()

    def default_table(self) -> str:
        raise NotImplementedError

    @property
    def connection(self):
        return connections[self.alias]

    def _quoted_table(self) -> str:
        return self.connection.ops.quote_name(self.table)


class SqlCustomerStore(_SqlStore):
    """CustomerStore over the marketplace customers table."""

    def default_table(self) -> str:
        return crossshop_settings.SQL_CUSTOMERS_TABLE

    def get(self, address: str) -> CustomerRecord | None:
        sql = (
            f"SELECT address, lifetime_earnings FROM {self._quoted_table()} "
            "WHERE LOWER(address) = %s"
        )
        try:
            with self.connection.cursor() as cursor:
                cursor.execute(sql, [address.lower()])
                row = cursor.fetchone()
        except Exception:
            logger.exception("Customer lookup failed for %s", address)
            raise
        if row is None:
            return None
        return CustomerRecord(address=row[0].lower(), lifetime_earnings=int(row[1] or 0))

    def iter_earning_customers(self) -> Iterable[CustomerRecord]:
        sql = (
            f"SELECT address, lifetime_earnings FROM {self._quoted_table()} "
            "WHERE lifetime_earnings > 0"
        )
        try:
            with self.connection.cursor() as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()
        except Exception:
            logger.exception("Earning customer scan failed")
            raise
        return [
            CustomerRecord(address=address.lower(), lifetime_earnings=int(earnings))
            for address, earnings in rows
        ]


class SqlShopStore(_SqlStore):
    """ShopStore over the marketplace shops table."""

    def default_table(self) -> str:
        return crossshop_settings.SQL_SHOPS_TABLE

    def get(self, shop_id: str) -> ShopRecord | None:
        sql = (
            f"SELECT shop_id, name, active, cross_shop_enabled FROM {self._quoted_table()} "
            "WHERE shop_id = %s"
        )
        try:
            with self.connection.cursor() as cursor:
                cursor.execute(sql, [shop_id])
                row = cursor.fetchone()
        except Exception:
            logger.exception("Shop lookup failed for %s", shop_id)
            raise
        if row is None:
            return None
        return ShopRecord(
            shop_id=row[0],
            name=row[1] or "",
            active=bool(row[2]),
            cross_shop_enabled=bool(row[3]),
        )
