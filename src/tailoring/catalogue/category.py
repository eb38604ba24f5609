"""Category aggregate: a plain tag for designs or fabrics.

Items store the category *name*, not its id. Deleting a category leaves items
pointing at a name that no longer exists; nothing cascades.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from tailoring.catalogue.item import ItemKind
from tailoring.domain import tailoring


@tailoring.aggregate
class Category:
    kind = String(required=True, choices=ItemKind)
    name = String(required=True, max_length=100)
    created_at = DateTime()

    @classmethod
    def create(cls, kind, name):
        from tailoring.catalogue.events import CategoryAdded

        category = cls(kind=kind, name=name.strip(), created_at=datetime.now(UTC))
        category.raise_(CategoryAdded(category_id=str(category.id), kind=kind, name=category.name))
        return category
