"""Shared BDD fixtures and step definitions for the tailoring scenarios."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from tailoring.cart.lines import AddCartLine
from tailoring.cart.management import CreateCart
from tailoring.order.order import Order


@pytest.fixture()
def context():
    """Scratch space shared by the steps of one scenario."""
    return {"error": None}


@given(parsers.cfparse("a design priced {price:f}"), target_fixture="design_id")
def a_design(add_item, price):
    return add_item(kind="design", name="Classic Panjabi", category="Panjabi", price=price)


@given(parsers.cfparse("a fabric priced {price:f}"), target_fixture="fabric_id")
def a_fabric(add_item, price):
    return add_item(kind="fabric", name="Egyptian Cotton", category="Cotton", price=price)


@given("a signed-in customer", target_fixture="signed_in_customer")
def a_signed_in_customer(customer_id):
    return customer_id


@given(
    parsers.cfparse("a cart holding {count:d} lines of the design with the fabric"),
    target_fixture="cart_id",
)
def a_filled_cart(design_id, fabric_id, count):
    cart_id = current_domain.process(CreateCart(session_id="sess-bdd"), asynchronous=False)
    for _ in range(count):
        current_domain.process(
            AddCartLine(cart_id=cart_id, design_id=design_id, fabric_id=fabric_id), asynchronous=False
        )
    return cart_id


@then("no order exists")
def no_order_exists():
    assert current_domain.repository_for(Order).find_all() == []
