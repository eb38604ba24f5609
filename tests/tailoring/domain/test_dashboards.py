"""Tests for the dashboard reducers over in-memory orders."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from tailoring.catalogue.item import ItemSnapshot
from tailoring.order.order import Order
from tailoring.people.user import User
from tailoring.stats.dashboards import (
    build_admin_dashboard,
    build_customer_dashboard,
    build_tailor_dashboard,
    count_orders,
    day_start,
    month_start,
)

NOW = datetime(2026, 10, 19, 15, 0, tzinfo=UTC)
DHAKA = timezone(timedelta(hours=6))


def _order(created_at, status="pending", line_total=65.0, customer_id="cust-001", tailor_id=None):
    design = ItemSnapshot(item_id="design-001", name="Classic Panjabi", price=line_total - 25.0)
    fabric = ItemSnapshot(item_id="fabric-001", name="Egyptian Cotton", price=25.0)
    order = Order.place(
        customer_id=customer_id,
        customer_name="Rahim Uddin",
        customer_address="Dhaka",
        customer_phone="01712345678",
        lines=[(design, fabric, created_at)],
        payment_method="cod",
        checkout_key=f"key-{created_at.isoformat()}-{status}",
        cart_id="cart-001",
    )
    order.created_at = created_at
    order.status = status
    if tailor_id:
        order.assign_tailor(tailor_id, "Karim Master")
    return order


@pytest.fixture()
def orders():
    return [
        _order(NOW - timedelta(hours=1), "completed", 130.0, tailor_id="tailor-001"),
        _order(datetime(2026, 10, 2, 9, 0, tzinfo=UTC), "pending"),
        _order(datetime(2026, 9, 30, 9, 0, tzinfo=UTC), "delivered", tailor_id="tailor-001"),
        _order(NOW - timedelta(hours=2), "approved", customer_id="cust-002", tailor_id="tailor-001"),
        _order(datetime(2026, 10, 5, 9, 0, tzinfo=UTC), "cancelled", customer_id="cust-002"),
    ]


class TestBoundaries:
    def test_day_and_month_start(self):
        assert day_start(NOW) == datetime(2026, 10, 19, tzinfo=UTC)
        assert month_start(NOW) == datetime(2026, 10, 1, tzinfo=UTC)


class TestCountOrders:
    def test_counts(self, orders):
        counts = count_orders(orders, NOW)
        assert counts.total == 5
        assert counts.today == 2
        assert counts.this_month == 4
        assert counts.pending == 1
        assert counts.processing == 1
        assert counts.open == 2
        assert counts.completed == 2
        assert counts.cancelled == 1

    def test_revenue_covers_completed_and_delivered_only(self, orders):
        counts = count_orders(orders, NOW)
        assert counts.revenue == 195.0
        assert counts.monthly_revenue == 130.0

    def test_empty_collection(self):
        counts = count_orders([], NOW)
        assert counts.total == 0
        assert counts.revenue == 0.0

    def test_naive_timestamps_are_read_as_utc(self):
        order = _order(NOW - timedelta(hours=1))
        order.created_at = (NOW - timedelta(hours=1)).replace(tzinfo=None)
        assert count_orders([order], NOW).today == 1

    def test_naive_reference_time_is_read_as_local(self):
        naive_now = datetime(2026, 10, 19, 12, 0)
        order = _order(naive_now.astimezone() - timedelta(hours=1), "completed")

        counts = count_orders([order], naive_now)

        assert counts.today == 1
        assert counts.monthly_revenue == 65.0

    def test_dashboard_builders_accept_naive_now(self, orders):
        dashboard = build_customer_dashboard("cust-002", orders, now=datetime(2026, 10, 19, 12, 0))
        assert dashboard.orders.total == 2

    def test_today_uses_local_midnight(self):
        local_now = datetime(2026, 10, 19, 1, 0, tzinfo=DHAKA)
        after_midnight = _order(datetime(2026, 10, 18, 20, 0, tzinfo=UTC))
        before_midnight = _order(datetime(2026, 10, 18, 17, 0, tzinfo=UTC))

        counts = count_orders([after_midnight, before_midnight], local_now)

        assert counts.today == 1
        assert counts.this_month == 2

    def test_completing_an_order_moves_it_out_of_open(self, orders):
        pending = orders[1]
        before = count_orders(orders, NOW)
        pending.change_status("completed", changed_by="admin-001", changed_by_role="admin")
        after = count_orders(orders, NOW)

        assert after.pending == before.pending - 1
        assert after.open == before.open - 1
        assert after.completed == before.completed + 1
        assert after.revenue == before.revenue + pending.total_amount


class TestAdminDashboard:
    def test_collection_totals_and_recent(self, orders):
        customers = [
            User.register(name=f"Customer {n}", email=f"c{n}@example.com", role="customer") for n in range(7)
        ]
        for offset, customer in enumerate(customers):
            customer.created_at = NOW - timedelta(days=offset)
        tailors = [User.register(name="Karim Master", email="karim@example.com", role="tailor")]

        dashboard = build_admin_dashboard(orders, customers, tailors, total_fabrics=3, total_designs=4, now=NOW)

        assert dashboard.total_customers == 7
        assert dashboard.total_tailors == 1
        assert dashboard.total_fabrics == 3
        assert dashboard.total_designs == 4
        assert dashboard.revenue == 195.0
        assert len(dashboard.recent_orders) == 5
        assert dashboard.recent_orders[0] is orders[0]
        assert [c.name for c in dashboard.recent_customers] == [f"Customer {n}" for n in range(5)]


class TestTailorDashboard:
    def test_only_assigned_orders_count(self, orders):
        dashboard = build_tailor_dashboard("tailor-001", orders, now=NOW)
        assert dashboard.orders.total == 3
        assert dashboard.orders.open == 1
        assert dashboard.orders.completed == 2
        assert dashboard.total_earnings == 195.0
        assert dashboard.monthly_earnings == 130.0


class TestCustomerDashboard:
    def test_only_own_orders_count(self, orders):
        dashboard = build_customer_dashboard("cust-002", orders, now=NOW)
        assert dashboard.orders.total == 2
        assert dashboard.orders.processing == 1
        assert dashboard.orders.cancelled == 1
        assert dashboard.orders.completed == 0
