"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from tailoring.domain import tailoring


@tailoring.event(part_of="ShoppingCart")
class CartCreated:
    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier()
    session_id = String()


@tailoring.event(part_of="ShoppingCart")
class CartLineAdded:
    """A design and fabric pairing was staged in the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    design_id = Identifier(required=True)
    fabric_id = Identifier(required=True)
    total_price = Float(required=True)


@tailoring.event(part_of="ShoppingCart")
class CartLineRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    index = Integer(required=True)


@tailoring.event(part_of="ShoppingCart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)
    lines_removed = Integer(required=True)


@tailoring.event(part_of="ShoppingCart")
class CartCheckedOut:
    """The cart's lines became an order and the cart was emptied."""

    __version__ = 1

    cart_id = Identifier(required=True)
    order_id = Identifier(required=True)
    line_count = Integer(required=True)
    total = Float(required=True)


@tailoring.event(part_of="ShoppingCart")
class CartsMerged:
    """A guest session's lines were moved into a signed-in customer's cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    guest_cart_id = Identifier(required=True)
    lines_merged = Integer(required=True)
