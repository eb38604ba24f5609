"""BDD tests for cart lines and checkout."""

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

from tailoring.cart.cart import ShoppingCart
from tailoring.cart.lines import AddCartLine, ClearCart
from tailoring.cart.management import CreateCart
from tailoring.catalogue.management import UpdateCatalogItem
from tailoring.checkout.wizard import AuthenticationRequired, CheckoutWizard
from tailoring.order.order import Order

scenarios("features/checkout.feature")


def _cart(cart_id):
    return current_domain.repository_for(ShoppingCart).get(cart_id)


def _checkout(context, cart_id, customer_id, method, option=None):
    wizard = CheckoutWizard(cart_id, customer_id=customer_id)
    try:
        wizard.begin()
        wizard.submit_details("Rahim Uddin", "House 12, Road 5, Dhanmondi, Dhaka", "01712345678")
        wizard.choose_payment(method, option)
        context["order_id"] = wizard.confirm()
    except (ValidationError, AuthenticationRequired) as exc:
        context["error"] = exc


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart_id")
def an_empty_cart():
    return current_domain.process(CreateCart(session_id="sess-bdd"), asynchronous=False)


@given(parsers.cfparse("the design price changes to {price:f}"))
def design_price_changes(design_id, price):
    current_domain.process(UpdateCatalogItem(item_id=design_id, price=price), asynchronous=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the design is added to the cart with the fabric")
def add_line(cart_id, design_id, fabric_id):
    current_domain.process(AddCartLine(cart_id=cart_id, design_id=design_id, fabric_id=fabric_id), asynchronous=False)


@when(parsers.cfparse('the customer checks out paying "{method:w}" with "{option:w}"'))
def checkout_with_option(context, cart_id, signed_in_customer, method, option):
    _checkout(context, cart_id, signed_in_customer, method, option)


@when(parsers.cfparse('the customer checks out paying "{method:w}"'))
def checkout(context, cart_id, signed_in_customer, method):
    _checkout(context, cart_id, signed_in_customer, method)


@when("an anonymous visitor checks out")
def anonymous_checkout(context, cart_id):
    _checkout(context, cart_id, None, "cod")


@when("the cart is cleared")
def clear_cart(cart_id):
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_lines(cart_id, count):
    assert len(_cart(cart_id).lines) == count


@then(parsers.cfparse("the cart total is {total}"))
def cart_total_is(cart_id, total):
    assert _cart(cart_id).formatted_total() == total


@then(parsers.cfparse("an order exists with total {total}"))
def order_exists(context, total):
    assert context["error"] is None
    order = current_domain.repository_for(Order).get(context["order_id"])
    assert order.formatted_total == total


@then(parsers.cfparse('the order payment status is "{status}"'))
def order_payment_status(context, status):
    order = current_domain.repository_for(Order).get(context["order_id"])
    assert order.payment_status == status


@then(parsers.cfparse('the visitor is sent to "{login_path}" and brought back to "{return_path}"'))
def redirected_to_login(context, login_path, return_path):
    error = context["error"]
    assert isinstance(error, AuthenticationRequired)
    assert error.login_path == login_path
    assert error.return_path == return_path


@then("the checkout is rejected")
def checkout_rejected(context):
    assert isinstance(context["error"], ValidationError)
    assert "expected_total" in context["error"].messages
