"""Checkout wizard: the three steps a customer walks through before an order exists.

    DETAILS → PAYMENT → CONFIRMATION

The wizard is not persisted. It holds what the customer typed, checks each
step as it is submitted, and on confirm dispatches ``PlaceOrder``. Every
wizard carries its own checkout key; retrying a confirm reuses it, so a
double click cannot produce two orders.
"""

from enum import Enum
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from tailoring.cart.cart import ShoppingCart
from tailoring.order.order import NO_PAYMENT_OPTION, PaymentMethod
from tailoring.order.placement import PlaceOrder, validate_details, validate_payment

logger = structlog.get_logger(__name__)

LOGIN_PATH = "/customer-login"
CART_PATH = "/cart"


class CheckoutStep(Enum):
    DETAILS = 1
    PAYMENT = 2
    CONFIRMATION = 3


class AuthenticationRequired(Exception):
    """Checkout was attempted without a signed-in customer."""

    def __init__(self, login_path=LOGIN_PATH, return_path=CART_PATH):
        super().__init__("Please sign in to place your order")
        self.login_path = login_path
        self.return_path = return_path


class CheckoutWizard:
    def __init__(self, cart_id, customer_id=None, customer_email=None, checkout_key=None):
        self.cart_id = str(cart_id)
        self.customer_id = customer_id
        self.customer_email = customer_email
        self.checkout_key = checkout_key or uuid4().hex
        self.step = CheckoutStep.DETAILS
        self.details = {}
        self.payment_method = None
        self.payment_option = None
        self.order_id = None

    def _cart(self):
        return current_domain.repository_for(ShoppingCart).get(self.cart_id)

    def begin(self):
        """Check the preconditions for opening the wizard and return the cart total."""
        if not self.customer_id:
            raise AuthenticationRequired()
        cart = self._cart()
        if not cart.lines:
            raise ValidationError({"cart": ["Your cart is empty"]})
        self.step = CheckoutStep.DETAILS
        return cart.total()

    def submit_details(self, name, address, phone):
        validate_details(name, address, phone)
        self.details = {
            "customer_name": name.strip(),
            "customer_address": address.strip(),
            "customer_phone": phone.strip(),
        }
        self.step = CheckoutStep.PAYMENT

    def back(self):
        if self.step == CheckoutStep.PAYMENT:
            self.step = CheckoutStep.DETAILS

    def choose_payment(self, method, option=None):
        if self.step != CheckoutStep.PAYMENT:
            raise ValidationError({"step": ["Enter your details before choosing a payment method"]})
        validate_payment(method, option)
        self.payment_method = PaymentMethod(method).value
        self.payment_option = option if self.payment_method == PaymentMethod.ONLINE.value else NO_PAYMENT_OPTION

    def confirm(self):
        """Place the order. The wizard stays on PAYMENT if anything is rejected."""
        if not self.customer_id:
            raise AuthenticationRequired()
        if self.step != CheckoutStep.PAYMENT or self.payment_method is None:
            raise ValidationError({"step": ["Choose a payment method before confirming"]})

        cart = self._cart()
        self.order_id = current_domain.process(
            PlaceOrder(
                cart_id=self.cart_id,
                customer_id=self.customer_id,
                customer_email=self.customer_email,
                payment_method=self.payment_method,
                payment_option=self.payment_option,
                expected_total=cart.total(),
                checkout_key=self.checkout_key,
                **self.details,
            ),
            asynchronous=False,
        )
        self.step = CheckoutStep.CONFIRMATION
        logger.info("Checkout confirmed", order_id=self.order_id, checkout_key=self.checkout_key)
        return self.order_id
