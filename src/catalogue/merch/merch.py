"""MerchItem aggregate: one card in the storefront collection."""

import json

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Integer, String, Text

from catalogue.domain import catalogue

DEFAULT_SIZE = "One Size"


@catalogue.aggregate
class MerchItem:
    """A piece of event merchandise offered on the storefront.

    Items are maintained by the catalogue team; the storefront only reads
    active items. ``sizes`` is stored as a JSON array and always reads back
    as a non-empty list.
    """

    name: String(required=True, max_length=255)
    image: String(max_length=1024)
    tone: String(max_length=100)
    tag: String(max_length=100)
    price: Float(required=True, min_value=0.0)
    sizes: Text()
    is_active: Boolean(default=True)
    sort_order: Integer(default=0)

    @invariant.post
    def sizes_must_be_a_list_of_labels(self):
        if not self.sizes:
            return

        try:
            sizes = json.loads(self.sizes)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"sizes": ["Sizes must be valid JSON"]}) from None

        if not isinstance(sizes, list) or not all(isinstance(size, str) and size.strip() for size in sizes):
            raise ValidationError({"sizes": ["Sizes must be a list of size labels"]})

    @classmethod
    def create(cls, name, price, sizes=None, image=None, tone=None, tag=None, sort_order=0):
        return cls(
            name=name,
            price=price,
            sizes=json.dumps(list(sizes or [])),
            image=image,
            tone=tone,
            tag=tag,
            sort_order=sort_order,
            is_active=True,
        )

    @property
    def size_options(self) -> list[str]:
        sizes = json.loads(self.sizes) if self.sizes else []
        return sizes or [DEFAULT_SIZE]

    def deactivate(self):
        self.is_active = False

    def to_card(self) -> dict:
        """Storefront representation of the item."""
        return {
            "id": str(self.id),
            "name": self.name,
            "image": self.image,
            "tone": self.tone,
            "tag": self.tag,
            "price": float(self.price or 0),
            "sizes": self.size_options,
        }
