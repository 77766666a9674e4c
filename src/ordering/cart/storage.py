"""Cart persistence boundary.

Carts are kept as JSON snapshots in a key-value ``CartStore`` under the fixed
key ``adph-cart-items`` (namespaced by storefront session). Loading is
forgiving: malformed lines are dropped, and a payload that cannot be parsed at
all is discarded together with its key.
"""

import json
from abc import ABC, abstractmethod

import structlog

from ordering.cart.cart import Cart, CartLine, ItemSelection, MerchSnapshot

logger = structlog.get_logger(__name__)

CART_STORAGE_KEY = "adph-cart-items"
SELECTION_STORAGE_KEY = "adph-cart-selections"


class CartStore(ABC):
    """Abstract key-value store holding serialized carts."""

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...


class MemoryCartStore(CartStore):
    """Process-local store; each storefront session keeps its own keys."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


_current_store: CartStore | None = None


def get_cart_store() -> CartStore:
    global _current_store
    if _current_store is None:
        _current_store = MemoryCartStore()
    return _current_store


def set_cart_store(store: CartStore) -> None:
    global _current_store
    _current_store = store


def reset_cart_store() -> None:
    global _current_store
    _current_store = None


def _cart_key(session_id: str) -> str:
    return f"{CART_STORAGE_KEY}:{session_id}"


def _selection_key(session_id: str) -> str:
    return f"{SELECTION_STORAGE_KEY}:{session_id}"


def _is_number(value) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_valid_line(entry) -> bool:
    return (
        isinstance(entry, dict)
        and isinstance(entry.get("item_id"), str)
        and isinstance(entry.get("name"), str)
        and (not entry.get("image") or isinstance(entry.get("image"), str))
        and _is_number(entry.get("price"))
        and isinstance(entry.get("size"), str)
        and isinstance(entry.get("quantity"), int)
        and not isinstance(entry.get("quantity"), bool)
        and entry["quantity"] >= 1
    )


def serialize_cart(cart: Cart) -> str:
    return json.dumps(
        [
            {
                "item_id": line.item_id,
                "name": line.name,
                "image": line.image,
                "price": line.price,
                "size": line.size,
                "quantity": line.quantity,
            }
            for line in cart.lines
        ]
    )


def deserialize_cart(payload: str) -> Cart:
    """Rebuild a cart from a stored snapshot.

    Raises ``ValueError`` when the payload is not a JSON list; individual
    entries that fail the shape check are skipped.
    """
    entries = json.loads(payload)
    if not isinstance(entries, list):
        raise ValueError("Stored cart is not a list")

    lines = tuple(
        CartLine(
            item_id=entry["item_id"],
            name=entry["name"],
            price=float(entry["price"]),
            size=entry["size"],
            quantity=int(entry["quantity"]),
            image=entry.get("image") or None,
        )
        for entry in entries
        if _is_valid_line(entry)
    )
    return Cart(lines=lines)


def load_cart(session_id: str) -> Cart:
    store = get_cart_store()
    key = _cart_key(session_id)
    payload = store.get(key)
    if not payload:
        return Cart()

    try:
        return deserialize_cart(payload)
    except ValueError:
        # json.JSONDecodeError is a ValueError too
        logger.warning("Discarding corrupt stored cart", session_id=session_id)
        store.delete(key)
        return Cart()


def save_cart(session_id: str, cart: Cart) -> None:
    store = get_cart_store()
    if cart.is_empty:
        store.delete(_cart_key(session_id))
        return
    store.set(_cart_key(session_id), serialize_cart(cart))


def _load_selections(session_id: str) -> dict:
    payload = get_cart_store().get(_selection_key(session_id))
    if not payload:
        return {}
    try:
        selections = json.loads(payload)
    except ValueError:
        return {}
    return selections if isinstance(selections, dict) else {}


def load_selection(session_id: str, item: MerchSnapshot) -> ItemSelection:
    stored = _load_selections(session_id).get(item.id)
    if not isinstance(stored, dict):
        return ItemSelection.initial(item)
    size = stored.get("size")
    return ItemSelection(
        quantity=stored.get("quantity") if isinstance(stored.get("quantity"), int) else 0,
        size=size if isinstance(size, str) else item.sole_size,
    )


def save_selection(session_id: str, item_id: str, selection: ItemSelection) -> None:
    selections = _load_selections(session_id)
    selections[item_id] = {"quantity": selection.quantity, "size": selection.size}
    get_cart_store().set(_selection_key(session_id), json.dumps(selections))
