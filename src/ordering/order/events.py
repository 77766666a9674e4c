"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A shopper checked out and the order is awaiting payment verification."""

    __version__ = 1

    order_id = Identifier(required=True)
    email = String(required=True)
    fulfillment_method = String(required=True)
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An operator moved the order to another status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDetailsUpdated:
    """An operator corrected contact details or line items."""

    __version__ = 1

    order_id = Identifier(required=True)
    changed_fields = String(required=True)  # comma-separated field names
    updated_at = DateTime(required=True)
