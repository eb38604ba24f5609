"""Order aggregate: a checked-out cart moving through the tailoring lifecycle.

The order is written once at checkout and afterwards changed in place by two
actions only: assigning a tailor and updating the status. There is no
enforced transition graph; any status may be set, including going
backwards. Concurrent updates are last-write-wins.

Lifecycle:
    pending → (approved | processing) → completed → delivered
    cancelled is reachable from any non-terminal state
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, String, Text, ValueObject

from tailoring.catalogue.item import ItemSnapshot
from tailoring.domain import tailoring
from tailoring.order.events import OrderPlaced, OrderStatusChanged, TailorAssigned
from tailoring.order.status import OrderStatus, StatusBucket, bucket_of


class PaymentMethod(Enum):
    COD = "cod"
    ONLINE = "online"


PAYMENT_OPTIONS = ("Card", "bKash", "Nagad", "Rocket")
NO_PAYMENT_OPTION = "N/A"


class PaymentStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"


def payment_status_for(method) -> str:
    """Cash on delivery waits for the courier; online payments are already in flight."""
    if PaymentMethod(method) == PaymentMethod.COD:
        return PaymentStatus.PENDING.value
    return PaymentStatus.PROCESSING.value


@tailoring.entity(part_of="Order")
class OrderLine:
    design = ValueObject(ItemSnapshot, required=True)
    fabric = ValueObject(ItemSnapshot, required=True)
    total_price = Float(required=True, min_value=0.0)
    added_at = DateTime()


@tailoring.aggregate
class Order:
    customer_id = Identifier(required=True)
    customer_email = String(max_length=254)
    customer_name = String(required=True, max_length=100)
    customer_address = Text(required=True)
    customer_phone = String(required=True, max_length=20)
    items = HasMany(OrderLine)
    total_amount = Float(required=True, min_value=0.0)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_option = String(max_length=20, default=NO_PAYMENT_OPTION)
    payment_status = String(required=True, choices=PaymentStatus)
    status = String(required=True, choices=OrderStatus, default=OrderStatus.PENDING.value)
    tailor_id = Identifier()
    tailor_name = String(max_length=100)
    tailor_email = String(max_length=254)
    checkout_key = String(required=True, max_length=64)
    cart_id = Identifier(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_amount_is_sum_of_lines(self):
        lines_total = sum((line.total_price for line in self.items), 0.0)
        if round(self.total_amount, 2) != round(lines_total, 2):
            raise ValidationError(
                {"total_amount": [f"Order total {self.total_amount:.2f} does not match its lines ({lines_total:.2f})"]}
            )

    @classmethod
    def place(
        cls,
        customer_id,
        customer_name,
        customer_address,
        customer_phone,
        lines,
        payment_method,
        checkout_key,
        cart_id,
        payment_option=None,
        customer_email=None,
    ):
        """Build a pending order from ``lines``, a list of (design, fabric, added_at) tuples taken from cart lines."""
        now = datetime.now(UTC)
        items = [
            OrderLine(design=design, fabric=fabric, total_price=design.price + fabric.price, added_at=added_at)
            for design, fabric, added_at in lines
        ]
        method = PaymentMethod(payment_method)

        order = cls(
            customer_id=customer_id,
            customer_email=customer_email,
            customer_name=customer_name,
            customer_address=customer_address,
            customer_phone=customer_phone,
            items=items,
            total_amount=sum((item.total_price for item in items), 0.0),
            payment_method=method.value,
            payment_option=payment_option if method == PaymentMethod.ONLINE else NO_PAYMENT_OPTION,
            payment_status=payment_status_for(method),
            status=OrderStatus.PENDING.value,
            checkout_key=checkout_key,
            cart_id=cart_id,
            created_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                cart_id=str(cart_id),
                checkout_key=checkout_key,
                item_count=len(items),
                total_amount=order.total_amount,
                payment_method=order.payment_method,
                payment_status=order.payment_status,
                placed_at=now,
            )
        )
        return order

    @property
    def bucket(self) -> StatusBucket:
        return bucket_of(self.status)

    @property
    def formatted_total(self) -> str:
        return f"{self.total_amount:.2f}"

    def is_assigned_to(self, tailor_id) -> bool:
        return self.tailor_id is not None and str(self.tailor_id) == str(tailor_id)

    def assign_tailor(self, tailor_id, tailor_name, tailor_email=None):
        previous_tailor_id = self.tailor_id
        self.tailor_id = tailor_id
        self.tailor_name = tailor_name or "Unknown"
        self.tailor_email = tailor_email
        self.updated_at = datetime.now(UTC)

        self.raise_(
            TailorAssigned(
                order_id=str(self.id),
                tailor_id=str(tailor_id),
                tailor_name=self.tailor_name,
                tailor_email=tailor_email,
                previous_tailor_id=str(previous_tailor_id) if previous_tailor_id else None,
            )
        )

    def change_status(self, new_status, changed_by, changed_by_role):
        """Set any status from the closed set. Setting the current status again still stamps ``updated_at``."""
        status = OrderStatus.parse(new_status)
        previous_status = self.status
        now = datetime.now(UTC)
        self.status = status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=status.value,
                changed_by=str(changed_by),
                changed_by_role=changed_by_role,
                changed_at=now,
            )
        )
