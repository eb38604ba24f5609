"""Catalogue management: commands and handlers for designs, fabrics and categories.

All of these are admin actions; the API layer checks the caller's role before
dispatching them.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from tailoring.catalogue.category import Category
from tailoring.catalogue.item import CatalogItem
from tailoring.domain import tailoring

logger = structlog.get_logger(__name__)


@tailoring.command(part_of="CatalogItem")
class AddCatalogItem:
    kind = String(required=True, max_length=10)
    name = String(required=True, max_length=150)
    category = String(required=True, max_length=100)
    price = Float(required=True, min_value=0.0)
    description = Text()
    image_url = String(required=True, max_length=1024)


@tailoring.command(part_of="CatalogItem")
class UpdateCatalogItem:
    item_id = Identifier(required=True)
    name = String(max_length=150)
    category = String(max_length=100)
    price = Float(min_value=0.0)
    description = Text()
    image_url = String(max_length=1024)


@tailoring.command(part_of="CatalogItem")
class RemoveCatalogItem:
    item_id = Identifier(required=True)


@tailoring.command(part_of="Category")
class AddCategory:
    kind = String(required=True, max_length=10)
    name = String(required=True, max_length=100)


@tailoring.command(part_of="Category")
class RemoveCategory:
    category_id = Identifier(required=True)


@tailoring.command_handler(part_of=CatalogItem)
class ManageCatalogItemHandler:
    @handle(AddCatalogItem)
    def add_item(self, command):
        item = CatalogItem.create(
            kind=command.kind,
            name=command.name,
            category=command.category,
            price=command.price,
            description=command.description,
            image_url=command.image_url,
        )
        current_domain.repository_for(CatalogItem).add(item)
        logger.info("Catalog item added", item_id=str(item.id), kind=item.kind, price=item.price)
        return str(item.id)

    @handle(UpdateCatalogItem)
    def update_item(self, command):
        repo = current_domain.repository_for(CatalogItem)
        item = repo.get(command.item_id)
        item.update_details(
            name=command.name,
            category=command.category,
            price=command.price,
            description=command.description,
            image_url=command.image_url,
        )
        repo.add(item)

    @handle(RemoveCatalogItem)
    def remove_item(self, command):
        repo = current_domain.repository_for(CatalogItem)
        item = repo.get(command.item_id)
        repo._dao.delete(item)
        logger.info("Catalog item removed", item_id=str(command.item_id), kind=item.kind)


@tailoring.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(AddCategory)
    def add_category(self, command):
        repo = current_domain.repository_for(Category)
        name = command.name.strip()
        if not name:
            raise ValidationError({"name": ["Category name cannot be blank"]})
        if repo.find_by_name(command.kind, name) is not None:
            raise ValidationError({"name": [f"Category '{name}' already exists"]})

        category = Category.create(kind=command.kind, name=name)
        repo.add(category)
        return str(category.id)

    @handle(RemoveCategory)
    def remove_category(self, command):
        # Items keep the category name; deletion does not cascade
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)
        logger.info("Category removed", category_id=str(command.category_id), name=category.name)
