"""Whole-collection reads over a Protean DAO query.

Dashboards and list views fetch every matching document and reduce in memory.
DAO queries are paginated, so this walks the pages until the result set
reports no further page.
"""

PAGE_SIZE = 100


def load_all(query, page_size=PAGE_SIZE):
    items = []
    offset = 0
    while True:
        page = query.offset(offset).limit(page_size).all()
        items.extend(page.items)
        if not page.has_next:
            return items
        offset += page_size
