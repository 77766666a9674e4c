"""Read side of the catalogue, consumed by the storefront."""

from protean.exceptions import ObjectNotFoundError

from catalogue.domain import catalogue
from catalogue.merch.merch import MerchItem

_PAGE_SIZE = 100


def list_active_merch() -> list[MerchItem]:
    """All active items, ordered by their explicit sort key."""
    with catalogue.domain_context():
        repo = catalogue.repository_for(MerchItem)
        items, offset = [], 0
        while True:
            page = repo._dao.query.filter(is_active=True).offset(offset).limit(_PAGE_SIZE).all()
            items.extend(page.items)
            if not page.has_next:
                break
            offset += _PAGE_SIZE

    return sorted(items, key=lambda item: (item.sort_order or 0, item.name))


def find_active_item(item_id: str) -> MerchItem | None:
    with catalogue.domain_context():
        try:
            item = catalogue.repository_for(MerchItem).get(item_id)
        except ObjectNotFoundError:
            return None

    return item if item.is_active else None
