"""Shopping cart: immutable value types with pure transitions.

Each storefront session owns one cart. Every operation returns a new ``Cart``;
nothing is written until the storage boundary (``ordering.cart.storage``).
At most one line exists per (item, size) pair.
"""

import math
from dataclasses import dataclass, replace

from protean.exceptions import ValidationError


def normalize_quantity(value) -> int:
    """Coerce user input to a non-negative whole quantity; junk becomes 0."""
    if isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return max(0, int(number))


@dataclass(frozen=True)
class MerchSnapshot:
    """The slice of a catalogue item the cart needs, captured when it is added."""

    id: str
    name: str
    price: float
    sizes: tuple[str, ...]
    image: str | None = None

    @classmethod
    def from_card(cls, card: dict) -> "MerchSnapshot":
        return cls(
            id=str(card["id"]),
            name=card["name"],
            price=float(card.get("price") or 0),
            sizes=tuple(card.get("sizes") or ()),
            image=card.get("image"),
        )

    @property
    def sole_size(self) -> str | None:
        return self.sizes[0] if len(self.sizes) == 1 else None


@dataclass(frozen=True)
class CartLine:
    item_id: str
    name: str
    price: float
    size: str
    quantity: int
    image: str | None = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class ItemSelection:
    """Pending quantity and size chosen on a catalogue card before adding to the bag."""

    quantity: int = 0
    size: str | None = None

    @classmethod
    def initial(cls, item: MerchSnapshot) -> "ItemSelection":
        return cls(quantity=0, size=item.sole_size)

    def set_quantity(self, value, item: MerchSnapshot) -> "ItemSelection":
        quantity = normalize_quantity(value)
        size = self.size
        if quantity > 0 and size is None and item.sizes:
            size = item.sizes[0]
        return replace(self, quantity=quantity, size=size)

    def adjust_quantity(self, delta, item: MerchSnapshot) -> "ItemSelection":
        try:
            step = int(delta)
        except (TypeError, ValueError):
            step = 0
        return self.set_quantity(self.quantity + step, item)

    def select_size(self, size: str) -> "ItemSelection":
        # Not checked against the item's sizes; the storefront only offers valid ones.
        return replace(self, size=size)


@dataclass(frozen=True)
class AddedToBag:
    cart: "Cart"
    selection: ItemSelection
    notice: str


@dataclass(frozen=True)
class Cart:
    lines: tuple[CartLine, ...] = ()

    @property
    def count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> float:
        return sum(line.line_total for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def add_line(self, item: MerchSnapshot, size: str | None, quantity: int) -> "Cart":
        """Add ``quantity`` of ``item`` in ``size``, merging with an existing line."""
        size = size or item.sole_size
        if not size:
            raise ValidationError({"size": ["Select a size before adding to your bag."]})
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be at least 1."]})

        for index, line in enumerate(self.lines):
            if line.item_id == item.id and line.size == size:
                merged = replace(line, quantity=line.quantity + quantity)
                return replace(self, lines=self.lines[:index] + (merged,) + self.lines[index + 1 :])

        line = CartLine(
            item_id=item.id,
            name=item.name,
            price=item.price or 0.0,
            size=size,
            quantity=quantity,
            image=item.image,
        )
        return replace(self, lines=self.lines + (line,))

    def add_selection(self, item: MerchSnapshot, selection: ItemSelection) -> AddedToBag:
        """Move a card's pending selection into the bag and reset its quantity."""
        cart = self.add_line(item, selection.size, selection.quantity)
        return AddedToBag(
            cart=cart,
            selection=replace(selection, quantity=0, size=selection.size or item.sole_size),
            notice=f"{item.name} added to bag",
        )

    def remove_line(self, index: int) -> "Cart":
        return replace(self, lines=tuple(line for i, line in enumerate(self.lines) if i != index))

    def update_quantity(self, index: int, value) -> "Cart":
        """Set a line's quantity; a line brought down to zero leaves the cart."""
        if not 0 <= index < len(self.lines):
            return self
        quantity = normalize_quantity(value)
        if quantity == 0:
            return self.remove_line(index)
        updated = replace(self.lines[index], quantity=quantity)
        return replace(self, lines=self.lines[:index] + (updated,) + self.lines[index + 1 :])

    def clear(self) -> "Cart":
        return Cart()
