"""Dashboard statistics for admins, tailors and customers.

Each dashboard pulls the whole relevant collection and reduces it in memory
on every request. The reducers are pure functions of the loaded documents
and a reference time ``now``; "today" starts at local midnight of ``now``
and "this month" at local midnight on the first of ``now``'s month.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from protean.utils.globals import current_domain

from tailoring.catalogue.item import CatalogItem, ItemKind
from tailoring.order.order import Order
from tailoring.order.status import OPEN_BUCKETS, StatusBucket, bucket_of
from tailoring.people.user import Role, User

RECENT_LIMIT = 5


@dataclass(frozen=True)
class OrderCounts:
    total: int = 0
    today: int = 0
    this_month: int = 0
    pending: int = 0
    processing: int = 0
    open: int = 0
    completed: int = 0
    cancelled: int = 0
    revenue: float = 0.0
    monthly_revenue: float = 0.0


@dataclass(frozen=True)
class AdminDashboard:
    total_customers: int
    total_tailors: int
    total_fabrics: int
    total_designs: int
    orders: OrderCounts
    recent_orders: tuple = field(default_factory=tuple)
    recent_customers: tuple = field(default_factory=tuple)

    @property
    def revenue(self) -> float:
        return self.orders.revenue


@dataclass(frozen=True)
class TailorDashboard:
    tailor_id: str
    orders: OrderCounts

    @property
    def total_earnings(self) -> float:
        return self.orders.revenue

    @property
    def monthly_earnings(self) -> float:
        return self.orders.monthly_revenue


@dataclass(frozen=True)
class CustomerDashboard:
    customer_id: str
    orders: OrderCounts


def local_now() -> datetime:
    return datetime.now().astimezone()


def _aware(moment: datetime, tz) -> datetime:
    # Stored timestamps may come back without tzinfo; they were written in UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(tz)


def day_start(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def month_start(now: datetime) -> datetime:
    return day_start(now).replace(day=1)


def count_orders(orders, now: datetime) -> OrderCounts:
    """Reduce a list of orders to counters, bucketing every status through ``bucket_of``.

    A naive ``now`` is read as local time.
    """
    if now.tzinfo is None:
        now = now.astimezone()
    today, month = day_start(now), month_start(now)
    counts = dict.fromkeys(("total", "today", "this_month", "pending", "processing", "open", "completed", "cancelled"), 0)
    revenue = monthly_revenue = 0.0

    for order in orders:
        counts["total"] += 1
        created_at = _aware(order.created_at, now.tzinfo) if order.created_at else None
        in_month = created_at is not None and created_at >= month
        if created_at is not None and created_at >= today:
            counts["today"] += 1
        if in_month:
            counts["this_month"] += 1

        bucket = bucket_of(order.status)
        if bucket in OPEN_BUCKETS:
            counts["open"] += 1
        if bucket == StatusBucket.PENDING:
            counts["pending"] += 1
        elif bucket == StatusBucket.PROCESSING:
            counts["processing"] += 1
        elif bucket == StatusBucket.DONE:
            counts["completed"] += 1
            revenue += order.total_amount or 0.0
            if in_month:
                monthly_revenue += order.total_amount or 0.0
        else:
            counts["cancelled"] += 1

    return OrderCounts(revenue=revenue, monthly_revenue=monthly_revenue, **counts)


def _newest(documents, limit=RECENT_LIMIT):
    dated = [doc for doc in documents if doc.created_at is not None]
    return tuple(sorted(dated, key=lambda doc: _aware(doc.created_at, UTC), reverse=True)[:limit])


def build_admin_dashboard(orders, customers, tailors, total_fabrics, total_designs, now=None) -> AdminDashboard:
    now = now or local_now()
    return AdminDashboard(
        total_customers=len(customers),
        total_tailors=len(tailors),
        total_fabrics=total_fabrics,
        total_designs=total_designs,
        orders=count_orders(orders, now),
        recent_orders=_newest(orders),
        recent_customers=_newest(customers),
    )


def build_tailor_dashboard(tailor_id, orders, now=None) -> TailorDashboard:
    now = now or local_now()
    assigned = [order for order in orders if order.is_assigned_to(tailor_id)]
    return TailorDashboard(tailor_id=str(tailor_id), orders=count_orders(assigned, now))


def build_customer_dashboard(customer_id, orders, now=None) -> CustomerDashboard:
    now = now or local_now()
    own = [order for order in orders if str(order.customer_id) == str(customer_id)]
    return CustomerDashboard(customer_id=str(customer_id), orders=count_orders(own, now))


# ---------------------------------------------------------------------------
# Readers: load the collections, then reduce
# ---------------------------------------------------------------------------
def admin_dashboard(now=None) -> AdminDashboard:
    users = current_domain.repository_for(User)
    catalogue = current_domain.repository_for(CatalogItem)
    return build_admin_dashboard(
        orders=current_domain.repository_for(Order).find_all(),
        customers=users.find_by_role(Role.CUSTOMER.value),
        tailors=users.find_by_role(Role.TAILOR.value),
        total_fabrics=catalogue.count_by_kind(ItemKind.FABRIC.value),
        total_designs=catalogue.count_by_kind(ItemKind.DESIGN.value),
        now=now,
    )


def tailor_dashboard(tailor_id, now=None) -> TailorDashboard:
    orders = current_domain.repository_for(Order).find_by_tailor(tailor_id)
    return build_tailor_dashboard(tailor_id, orders, now=now)


def customer_dashboard(customer_id, now=None) -> CustomerDashboard:
    orders = current_domain.repository_for(Order).find_by_customer(customer_id)
    return build_customer_dashboard(customer_id, orders, now=now)
