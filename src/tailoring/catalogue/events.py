"""Domain events for the catalogue aggregates."""

from protean.fields import Float, Identifier, String

from tailoring.domain import tailoring


@tailoring.event(part_of="CatalogItem")
class CatalogItemAdded:
    """An admin added a design or fabric to the catalogue."""

    __version__ = 1

    item_id = Identifier(required=True)
    kind = String(required=True)
    name = String(required=True)
    category = String()
    price = Float(required=True)


@tailoring.event(part_of="CatalogItem")
class CatalogItemUpdated:
    """Details of a catalogue item were changed."""

    __version__ = 1

    item_id = Identifier(required=True)
    name = String(required=True)
    category = String()
    previous_price = Float()
    price = Float(required=True)


@tailoring.event(part_of="Category")
class CategoryAdded:
    __version__ = 1

    category_id = Identifier(required=True)
    kind = String(required=True)
    name = String(required=True)
