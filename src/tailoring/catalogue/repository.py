"""Repositories for the catalogue aggregates."""

from tailoring.catalogue.category import Category
from tailoring.catalogue.item import CatalogItem
from tailoring.domain import tailoring
from tailoring.utils.query import load_all


@tailoring.repository(part_of=CatalogItem)
class CatalogItemRepository:
    def find_by_kind(self, kind: str, category: str | None = None) -> list[CatalogItem]:
        """All items of one kind, newest first, optionally narrowed to a category name."""
        filters = {"kind": kind}
        if category:
            filters["category"] = category
        items = load_all(self._dao.query.filter(**filters))
        return sorted(items, key=lambda item: item.created_at, reverse=True)

    def count_by_kind(self, kind: str) -> int:
        return len(load_all(self._dao.query.filter(kind=kind)))


@tailoring.repository(part_of=Category)
class CategoryRepository:
    def find_by_kind(self, kind: str) -> list[Category]:
        categories = load_all(self._dao.query.filter(kind=kind))
        return sorted(categories, key=lambda category: category.name.lower())

    def find_by_name(self, kind: str, name: str) -> Category | None:
        matches = self._dao.query.filter(kind=kind, name=name).all().items
        return matches[0] if matches else None
