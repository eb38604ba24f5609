"""Cart line management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from tailoring.cart.cart import ShoppingCart
from tailoring.catalogue.item import CatalogItem, ItemKind
from tailoring.domain import tailoring


@tailoring.command(part_of="ShoppingCart")
class AddCartLine:
    cart_id = Identifier(required=True)
    design_id = Identifier(required=True)
    fabric_id = Identifier(required=True)


@tailoring.command(part_of="ShoppingCart")
class RemoveCartLine:
    cart_id = Identifier(required=True)
    index = Integer(required=True)


@tailoring.command(part_of="ShoppingCart")
class ClearCart:
    cart_id = Identifier(required=True)


@tailoring.command_handler(part_of=ShoppingCart)
class ManageCartLinesHandler:
    @handle(AddCartLine)
    def add_cart_line(self, command):
        catalogue = current_domain.repository_for(CatalogItem)
        design = catalogue.get(command.design_id)
        design.ensure_kind(ItemKind.DESIGN)
        fabric = catalogue.get(command.fabric_id)
        fabric.ensure_kind(ItemKind.FABRIC)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        line = cart.add_line(design.snapshot(), fabric.snapshot())
        repo.add(cart)
        return str(line.id)

    @handle(RemoveCartLine)
    def remove_cart_line(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.remove_line(command.index)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)
