"""Order list views: admin search, customer history and the tailor work queues.

All filtering goes through ``bucket_of`` / ``OrderStatus.parse`` so the
pages and the dashboard counters can never disagree about what "pending"
or "completed" means.
"""

from protean.utils.globals import current_domain

from tailoring.order.order import Order
from tailoring.order.status import OPEN_BUCKETS, OrderStatus, StatusBucket, bucket_of


def _matches_search(order, term):
    term = term.strip().lower()
    haystack = (order.customer_name or "", str(order.id), order.tailor_name or "")
    return any(term in value.lower() for value in haystack)


def _with_status(orders, status):
    if not status:
        return orders
    wanted = OrderStatus.parse(status)
    return [order for order in orders if OrderStatus.parse(order.status) == wanted]


def admin_orders(search: str | None = None, status: str | None = None) -> list[Order]:
    """Every order, newest first, narrowed by a free-text search and a status."""
    orders = current_domain.repository_for(Order).find_all()
    if search and search.strip():
        orders = [order for order in orders if _matches_search(order, search)]
    return _with_status(orders, status)


def customer_orders(customer_id, status: str | None = None) -> list[Order]:
    orders = current_domain.repository_for(Order).find_by_customer(customer_id)
    return _with_status(orders, status)


def tailor_open_orders(tailor_id) -> list[Order]:
    orders = current_domain.repository_for(Order).find_by_tailor(tailor_id)
    return [order for order in orders if bucket_of(order.status) in OPEN_BUCKETS]


def tailor_done_orders(tailor_id) -> list[Order]:
    orders = current_domain.repository_for(Order).find_by_tailor(tailor_id)
    return [order for order in orders if bucket_of(order.status) == StatusBucket.DONE]
