"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from tailoring.domain import tailoring


@tailoring.event(part_of="Order")
class OrderPlaced:
    """A customer checked out a cart and the order was recorded as pending."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    checkout_key = String(required=True)
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    payment_method = String(required=True)
    payment_status = String(required=True)
    placed_at = DateTime(required=True)


@tailoring.event(part_of="Order")
class TailorAssigned:
    """An admin handed the order to a tailor. The tailor's name and email were copied onto the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    tailor_id = Identifier(required=True)
    tailor_name = String(required=True)
    tailor_email = String()
    previous_tailor_id = Identifier()


@tailoring.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_by = Identifier(required=True)
    changed_by_role = String(required=True)
    changed_at = DateTime(required=True)
