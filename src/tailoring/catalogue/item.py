"""CatalogItem aggregate: the designs and fabrics customers pair into cart lines.

Designs and fabrics share one shape and differ only by ``kind``. Carts and
orders never point back at a catalog item; they copy an ``ItemSnapshot`` at
the moment the line is created, so later price or name changes do not reach
existing carts or orders.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from tailoring.domain import tailoring


class ItemKind(Enum):
    DESIGN = "design"
    FABRIC = "fabric"


@tailoring.value_object
class ItemSnapshot:
    """A frozen copy of a catalog item taken when it was put into a cart."""

    item_id = Identifier(required=True)
    name = String(required=True, max_length=150)
    category = String(max_length=100)
    price = Float(required=True, min_value=0.0)
    image_url = String(max_length=1024)


@tailoring.aggregate
class CatalogItem:
    kind = String(required=True, choices=ItemKind)
    name = String(required=True, max_length=150)
    category = String(required=True, max_length=100)
    price = Float(required=True, min_value=0.0)
    description = Text()
    image_url = String(required=True, max_length=1024)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, kind, name, category, price, image_url, description=None):
        from tailoring.catalogue.events import CatalogItemAdded

        now = datetime.now(UTC)
        item = cls(
            kind=kind,
            name=name,
            category=category,
            price=price,
            description=description,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            CatalogItemAdded(
                item_id=str(item.id),
                kind=kind,
                name=name,
                category=category,
                price=price,
            )
        )
        return item

    def update_details(self, name=None, category=None, price=None, description=None, image_url=None):
        """Apply a partial update; fields left as None keep their current value."""
        from tailoring.catalogue.events import CatalogItemUpdated

        previous_price = self.price
        if name is not None:
            self.name = name
        if category is not None:
            self.category = category
        if price is not None:
            self.price = price
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CatalogItemUpdated(
                item_id=str(self.id),
                name=self.name,
                category=self.category,
                previous_price=previous_price,
                price=self.price,
            )
        )

    def snapshot(self):
        return ItemSnapshot(
            item_id=str(self.id),
            name=self.name,
            category=self.category,
            price=self.price,
            image_url=self.image_url,
        )

    def ensure_kind(self, kind: ItemKind):
        if ItemKind(self.kind) != kind:
            raise ValidationError({f"{kind.value}_id": [f"Catalog item {self.id} is not a {kind.value}"]})
