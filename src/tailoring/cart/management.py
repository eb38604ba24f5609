"""Cart management: creating carts and merging a guest cart at sign-in."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from tailoring.cart.cart import ShoppingCart
from tailoring.domain import tailoring

logger = structlog.get_logger(__name__)


@tailoring.command(part_of="ShoppingCart")
class CreateCart:
    """Create a cart for a browsing session, signed in or not."""

    customer_id = Identifier()
    session_id = String(max_length=255)


@tailoring.command(part_of="ShoppingCart")
class MergeGuestCart:
    cart_id = Identifier(required=True)
    guest_cart_id = Identifier(required=True)


@tailoring.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = ShoppingCart.create(
            customer_id=command.customer_id,
            session_id=command.session_id,
        )
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(MergeGuestCart)
    def merge_guest_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        guest_cart = repo.get(command.guest_cart_id)

        cart.merge_from(guest_cart)
        repo.add(cart)
        repo.add(guest_cart)
        logger.info(
            "Guest cart merged",
            cart_id=str(cart.id),
            guest_cart_id=str(guest_cart.id),
            line_count=len(cart.lines),
        )
