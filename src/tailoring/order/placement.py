"""Order placement: turns a cart into a pending order.

The handler re-reads every design and fabric from the catalogue, so the
order is priced from current catalogue data rather than from whatever the
client believes the cart costs. A disagreement with the client's expected
total rejects the checkout before anything is written. The order is added
and the cart emptied inside the handler's unit of work, so either both
happen or neither does.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from tailoring.cart.cart import ShoppingCart
from tailoring.catalogue.item import CatalogItem, ItemKind
from tailoring.domain import tailoring
from tailoring.order.order import PAYMENT_OPTIONS, Order, PaymentMethod
from tailoring.people.user import MIN_PHONE_LENGTH

logger = structlog.get_logger(__name__)


class DuplicateCheckout(Exception):
    """An order already exists for this checkout key."""

    def __init__(self, checkout_key, order_id):
        super().__init__(f"Checkout {checkout_key} already produced order {order_id}")
        self.checkout_key = checkout_key
        self.order_id = order_id


def validate_details(name, address, phone):
    errors = {}
    if not (name or "").strip():
        errors["customer_name"] = ["Name is required"]
    if not (address or "").strip():
        errors["customer_address"] = ["Address is required"]
    if not (phone or "").strip():
        errors["customer_phone"] = ["Phone number is required"]
    elif len(phone.strip()) < MIN_PHONE_LENGTH:
        errors["customer_phone"] = [f"Phone number must be at least {MIN_PHONE_LENGTH} digits"]
    if errors:
        raise ValidationError(errors)


def validate_payment(method, option=None):
    try:
        method = PaymentMethod(method)
    except ValueError:
        raise ValidationError({"payment_method": ["Please select a payment method"]})
    if method == PaymentMethod.ONLINE and option not in PAYMENT_OPTIONS:
        raise ValidationError({"payment_option": [f"Choose one of: {', '.join(PAYMENT_OPTIONS)}"]})


def _current_snapshot(catalogue, item_id, kind):
    try:
        item = catalogue.get(item_id)
    except ObjectNotFoundError:
        raise ValidationError({"items": [f"The {kind.value} {item_id} is no longer available"]})
    item.ensure_kind(kind)
    return item.snapshot()


@tailoring.command(part_of="Order")
class PlaceOrder:
    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_email = String(max_length=254)
    customer_name = String(required=True, max_length=100)
    customer_address = Text(required=True)
    customer_phone = String(required=True, max_length=20)
    payment_method = String(required=True, max_length=10)
    payment_option = String(max_length=20)
    expected_total = Float(required=True, min_value=0.0)
    checkout_key = String(required=True, max_length=64)


@tailoring.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        orders = current_domain.repository_for(Order)
        existing = orders.find_by_checkout_key(command.checkout_key)
        if existing is not None:
            logger.warning(
                "Duplicate checkout rejected",
                checkout_key=command.checkout_key,
                order_id=str(existing.id),
            )
            raise DuplicateCheckout(command.checkout_key, str(existing.id))

        validate_details(command.customer_name, command.customer_address, command.customer_phone)
        validate_payment(command.payment_method, command.payment_option)

        carts = current_domain.repository_for(ShoppingCart)
        cart = carts.get(command.cart_id)
        if not cart.lines:
            raise ValidationError({"cart": ["Your cart is empty"]})

        catalogue = current_domain.repository_for(CatalogItem)
        lines = [
            (
                _current_snapshot(catalogue, line.design.item_id, ItemKind.DESIGN),
                _current_snapshot(catalogue, line.fabric.item_id, ItemKind.FABRIC),
                line.added_at,
            )
            for line in cart.ordered_lines
        ]
        recomputed = sum(design.price + fabric.price for design, fabric, _ in lines)
        if round(recomputed, 2) != round(command.expected_total, 2):
            logger.warning(
                "Checkout total mismatch",
                cart_id=str(cart.id),
                expected_total=command.expected_total,
                recomputed_total=recomputed,
            )
            raise ValidationError(
                {
                    "expected_total": [
                        f"Prices have changed: cart total is now {recomputed:.2f}, not {command.expected_total:.2f}"
                    ]
                }
            )

        order = Order.place(
            customer_id=command.customer_id,
            customer_email=command.customer_email,
            customer_name=command.customer_name.strip(),
            customer_address=command.customer_address.strip(),
            customer_phone=command.customer_phone.strip(),
            lines=lines,
            payment_method=command.payment_method,
            payment_option=command.payment_option,
            checkout_key=command.checkout_key,
            cart_id=command.cart_id,
        )
        orders.add(order)

        cart.check_out(order.id)
        carts.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            total_amount=order.total_amount,
            payment_method=order.payment_method,
        )
        return str(order.id)
