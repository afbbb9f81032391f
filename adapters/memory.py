"""In-memory CustomerStore / ShopStore adapters (tests, local development)."""

from typing import Iterable

from crossshop.protocols.stores import CustomerRecord, ShopRecord


class InMemoryCustomerStore:
    """
    Dict-backed CustomerStore.

    Addresses are matched case-insensitively.
    """

    def __init__(self, customers: Iterable[CustomerRecord] = ()):
        self._customers: dict[str, CustomerRecord] = {}
        for customer in customers:
            self.put(customer)

    def put(self, customer: CustomerRecord) -> None:
        self._customers[customer.address.lower()] = customer

    def set_earnings(self, address: str, lifetime_earnings: int) -> CustomerRecord:
        record = CustomerRecord(address=address.lower(), lifetime_earnings=lifetime_earnings)
        self.put(record)
        return record

    def get(self, address: str) -> CustomerRecord | None:
        return self._customers.get(address.lower())

    def iter_earning_customers(self) -> Iterable[CustomerRecord]:
        return [c for c in self._customers.values() if c.lifetime_earnings > 0]


class InMemoryShopStore:
    """Dict-backed ShopStore."""

    def __init__(self, shops: Iterable[ShopRecord] = ()):
        self._shops: dict[str, ShopRecord] = {s.shop_id: s for s in shops}

    def put(self, shop: ShopRecord) -> None:
        self._shops[shop.shop_id] = shop

    def get(self, shop_id: str) -> ShopRecord | None:
        return self._shops.get(shop_id)
