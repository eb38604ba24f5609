"""Repository for the Order aggregate.

Every finder returns the whole matching collection, newest first. Nothing is
cached or pre-aggregated.
"""

from tailoring.domain import tailoring
from tailoring.order.order import Order
from tailoring.utils.query import load_all


def _newest_first(orders):
    return sorted(orders, key=lambda order: order.created_at, reverse=True)


@tailoring.repository(part_of=Order)
class OrderRepository:
    def find_all(self) -> list[Order]:
        return _newest_first(load_all(self._dao.query))

    def find_by_customer(self, customer_id) -> list[Order]:
        return _newest_first(load_all(self._dao.query.filter(customer_id=str(customer_id))))

    def find_by_tailor(self, tailor_id) -> list[Order]:
        return _newest_first(load_all(self._dao.query.filter(tailor_id=str(tailor_id))))

    def find_by_checkout_key(self, checkout_key: str) -> Order | None:
        matches = self._dao.query.filter(checkout_key=checkout_key).all().items
        return matches[0] if matches else None
