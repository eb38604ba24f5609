"""Tests for the ShoppingCart aggregate: lines, totals, clearing and merging."""

import pytest
from protean.exceptions import ValidationError

from tailoring.cart.cart import CartStatus, ShoppingCart
from tailoring.cart.events import CartCheckedOut, CartCleared, CartLineAdded, CartLineRemoved, CartsMerged
from tailoring.catalogue.item import ItemSnapshot


def _design(price=40.0, item_id="design-001", name="Classic Panjabi"):
    return ItemSnapshot(item_id=item_id, name=name, category="Panjabi", price=price, image_url="https://cdn/d.jpg")


def _fabric(price=25.0, item_id="fabric-001", name="Egyptian Cotton"):
    return ItemSnapshot(item_id=item_id, name=name, category="Cotton", price=price, image_url="https://cdn/f.jpg")


@pytest.fixture()
def cart():
    return ShoppingCart.create(session_id="sess-001")


class TestCartCreation:
    def test_create_for_guest_session(self, cart):
        assert cart.session_id == "sess-001"
        assert cart.customer_id is None
        assert cart.status == CartStatus.ACTIVE.value
        assert len(cart.lines) == 0

    def test_create_for_customer(self):
        cart = ShoppingCart.create(customer_id="cust-001")
        assert str(cart.customer_id) == "cust-001"

    def test_empty_cart_totals_zero(self, cart):
        assert cart.total() == 0
        assert cart.formatted_total() == "0.00"


class TestAddLine:
    def test_line_total_is_design_plus_fabric(self, cart):
        line = cart.add_line(_design(40.0), _fabric(25.0))
        assert line.total_price == 65.0
        assert cart.formatted_total() == "65.00"

    def test_line_keeps_snapshots(self, cart):
        line = cart.add_line(_design(), _fabric())
        assert line.design.name == "Classic Panjabi"
        assert line.fabric.name == "Egyptian Cotton"
        assert line.added_at is not None

    def test_same_pair_twice_makes_two_lines(self, cart):
        cart.add_line(_design(), _fabric())
        cart.add_line(_design(), _fabric())
        assert len(cart.lines) == 2
        assert cart.total() == 130.0

    def test_lines_are_numbered_in_insertion_order(self, cart):
        cart.add_line(_design(name="First"), _fabric())
        cart.add_line(_design(name="Second"), _fabric())
        assert [line.design.name for line in cart.ordered_lines] == ["First", "Second"]
        assert [line.seq for line in cart.ordered_lines] == [1, 2]

    def test_total_sums_every_line(self, cart):
        cart.add_line(_design(40.0), _fabric(25.0))
        cart.add_line(_design(19.99), _fabric(10.01))
        assert cart.formatted_total() == "95.00"

    def test_raises_line_added_event(self, cart):
        cart._events.clear()
        cart.add_line(_design(), _fabric())
        event = cart._events[-1]
        assert isinstance(event, CartLineAdded)
        assert event.total_price == 65.0
        assert event.design_id == "design-001"
        assert event.fabric_id == "fabric-001"


class TestRemoveLine:
    def test_remove_by_position(self, cart):
        cart.add_line(_design(name="First"), _fabric())
        cart.add_line(_design(name="Second"), _fabric())
        cart.add_line(_design(name="Third"), _fabric())

        cart.remove_line(1)

        assert [line.design.name for line in cart.ordered_lines] == ["First", "Third"]

    def test_out_of_range_index_rejected(self, cart):
        cart.add_line(_design(), _fabric())
        with pytest.raises(ValidationError) as exc:
            cart.remove_line(1)
        assert "index" in exc.value.messages
        assert len(cart.lines) == 1

    def test_negative_index_rejected(self, cart):
        cart.add_line(_design(), _fabric())
        with pytest.raises(ValidationError):
            cart.remove_line(-1)

    def test_raises_line_removed_event(self, cart):
        cart.add_line(_design(), _fabric())
        cart.remove_line(0)
        assert isinstance(cart._events[-1], CartLineRemoved)
        assert cart._events[-1].index == 0


class TestClear:
    def test_clear_then_total_is_zero(self, cart):
        cart.add_line(_design(), _fabric())
        cart.add_line(_design(), _fabric())
        cart.clear()
        assert len(cart.lines) == 0
        assert cart.total() == 0

    def test_clear_raises_event_with_count(self, cart):
        cart.add_line(_design(), _fabric())
        cart.clear()
        event = cart._events[-1]
        assert isinstance(event, CartCleared)
        assert event.lines_removed == 1


class TestCheckOut:
    def test_check_out_empties_cart_and_stays_active(self, cart):
        cart.add_line(_design(), _fabric())
        cart.check_out("order-001")
        assert len(cart.lines) == 0
        assert cart.status == CartStatus.ACTIVE.value

    def test_check_out_event_records_total(self, cart):
        cart.add_line(_design(), _fabric())
        cart.add_line(_design(), _fabric())
        cart.check_out("order-001")
        event = cart._events[-1]
        assert isinstance(event, CartCheckedOut)
        assert event.line_count == 2
        assert event.total == 130.0

    def test_empty_cart_cannot_check_out(self, cart):
        with pytest.raises(ValidationError):
            cart.check_out("order-001")


class TestMerge:
    def test_guest_lines_are_appended(self):
        customer_cart = ShoppingCart.create(customer_id="cust-001")
        customer_cart.add_line(_design(name="Mine"), _fabric())
        guest_cart = ShoppingCart.create(session_id="sess-guest")
        guest_cart.add_line(_design(name="Guest A"), _fabric())
        guest_cart.add_line(_design(name="Guest B"), _fabric())

        customer_cart.merge_from(guest_cart)

        assert [line.design.name for line in customer_cart.ordered_lines] == ["Mine", "Guest A", "Guest B"]
        assert customer_cart.total() == 195.0

    def test_guest_cart_is_emptied_and_marked_merged(self):
        customer_cart = ShoppingCart.create(customer_id="cust-001")
        guest_cart = ShoppingCart.create(session_id="sess-guest")
        guest_cart.add_line(_design(), _fabric())

        customer_cart.merge_from(guest_cart)

        assert len(guest_cart.lines) == 0
        assert guest_cart.status == CartStatus.MERGED.value
        assert isinstance(customer_cart._events[-1], CartsMerged)
        assert customer_cart._events[-1].lines_merged == 1

    def test_merged_cart_rejects_new_lines(self):
        customer_cart = ShoppingCart.create(customer_id="cust-001")
        guest_cart = ShoppingCart.create(session_id="sess-guest")
        customer_cart.merge_from(guest_cart)

        with pytest.raises(ValidationError) as exc:
            guest_cart.add_line(_design(), _fabric())
        assert "status" in exc.value.messages

    def test_cannot_merge_into_itself(self, cart):
        with pytest.raises(ValidationError):
            cart.merge_from(cart)

    def test_customer_cart_cannot_be_merged_away(self):
        customer_cart = ShoppingCart.create(customer_id="cust-001")
        other_cart = ShoppingCart.create(customer_id="cust-002")
        other_cart.add_line(_design(), _fabric())

        with pytest.raises(ValidationError) as exc:
            customer_cart.merge_from(other_cart)

        assert "guest_cart_id" in exc.value.messages
        assert len(other_cart.lines) == 1
        assert other_cart.status == CartStatus.ACTIVE.value
        assert len(customer_cart.lines) == 0
