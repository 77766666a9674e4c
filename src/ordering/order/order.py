"""Order aggregate (CQRS): the persisted record of one checkout.

An order is created once, at checkout, in the ``pending`` status. Afterwards
only the admin desk touches it: status changes and corrections to contact
details or line items. Orders are never deleted.

Status sets:
    full : pending, paid, confirmed, packing, shipped, intransit,
            delivered, cancelled
    basic: pending, paid

Any status of the active set may follow any other; ``delivered`` and
``cancelled`` are terminal by convention only.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text

from ordering.domain import ordering
from ordering.order.events import OrderDetailsUpdated, OrderPlaced, OrderStatusChanged
from shared.settings import status_set_name


# ---------------------------------------------------------------------------
# Enums and constants
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    CONFIRMED = "confirmed"
    PACKING = "packing"
    SHIPPED = "shipped"
    IN_TRANSIT = "intransit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class FulfillmentMethod(Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


GCASH = "gcash"
PICKUP_ADDRESS = "pickup"

STATUS_SETS = {
    "full": tuple(OrderStatus),
    "basic": (OrderStatus.PENDING, OrderStatus.PAID),
}


def active_statuses() -> tuple[OrderStatus, ...]:
    """Statuses offered by this deployment (``MERCH_STATUS_SET``)."""
    name = status_set_name()
    if name not in STATUS_SETS:
        raise ValueError(f"Unknown status set: {name!r}")
    return STATUS_SETS[name]


def parse_status(value: str) -> OrderStatus:
    """Resolve a status string against the active set."""
    try:
        status = OrderStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError({"status": ["Unknown order status."]}) from None
    if status not in active_statuses():
        raise ValidationError({"status": ["Unknown order status."]})
    return status


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLineItem:
    """A frozen copy of one cart line: price and line total never change after checkout."""

    item_id = String(max_length=255)
    name = String(required=True, max_length=255)
    size = String(required=True, max_length=50)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    line_total = Float(required=True, min_value=0.0)

    def to_record(self) -> dict:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "size": self.size,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "line_total": self.line_total,
        }


def _line_from_data(data: dict) -> OrderLineItem:
    """Build a line from a snake_case or camelCase dict; line total defaults to qty x price."""
    quantity = data.get("quantity")
    unit_price = data.get("unit_price", data.get("unitPrice", 0.0))
    line_total = data.get("line_total", data.get("lineTotal"))
    if line_total is None and isinstance(quantity, int | float) and isinstance(unit_price, int | float):
        line_total = quantity * unit_price
    return OrderLineItem(
        item_id=data.get("item_id") or data.get("itemId"),
        name=data.get("name"),
        size=data.get("size"),
        quantity=quantity,
        unit_price=unit_price,
        line_total=line_total,
    )


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    full_name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=50)
    address = Text(required=True)
    payment_method = String(max_length=50, default=GCASH)
    fulfillment_method = String(choices=FulfillmentMethod, default=FulfillmentMethod.PICKUP.value)
    payment_reference = String(required=True, max_length=255)
    receipt_url = String(max_length=2048)
    items = HasMany(OrderLineItem)
    delivery_fee = Float(default=0.0, min_value=0.0)
    total_amount = Float(default=0.0, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        full_name,
        email,
        phone,
        address,
        fulfillment_method,
        payment_reference,
        receipt_url,
        items_data,
        delivery_fee=0.0,
        total_amount=None,
    ):
        """Create a pending order from a checkout.

        ``total_amount`` is taken as computed by the caller; when omitted it is
        the sum of line totals plus the delivery fee.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            full_name=full_name,
            email=email,
            phone=phone,
            address=address,
            payment_method=GCASH,
            fulfillment_method=fulfillment_method,
            payment_reference=payment_reference,
            receipt_url=receipt_url,
            delivery_fee=delivery_fee or 0.0,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for data in items_data:
            order.add_items(_line_from_data(data))

        order.total_amount = total_amount if total_amount is not None else order.subtotal + order.delivery_fee

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                email=order.email,
                fulfillment_method=order.fulfillment_method,
                item_count=order.item_count,
                total_amount=order.total_amount,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def subtotal(self) -> float:
        return sum(item.line_total for item in self.items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Admin changes
    # -------------------------------------------------------------------
    def change_status(self, status) -> bool:
        """Move to ``status``; returns False when it equals the current one."""
        target = status if isinstance(status, OrderStatus) else parse_status(status)
        if target.value == self.status:
            return False

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )
        return True

    def update_details(self, email=None, phone=None, address=None, items_data=None):
        """Overwrite only the supplied fields."""
        changed = []
        if email:
            self.email = email
            changed.append("email")
        if phone:
            self.phone = phone
            changed.append("phone")
        if address:
            self.address = address
            changed.append("address")
        if items_data:
            for item in list(self.items):
                self.remove_items(item)
            for data in items_data:
                self.add_items(_line_from_data(data))
            changed.append("items")

        if not changed:
            return

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            OrderDetailsUpdated(
                order_id=str(self.id),
                changed_fields=",".join(changed),
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Representations
    # -------------------------------------------------------------------
    def to_record(self) -> dict:
        """Row shape returned to the admin desk."""
        return {
            "id": str(self.id),
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "payment_method": self.payment_method,
            "payment_reference": self.payment_reference,
            "receipt_url": self.receipt_url,
            "items": [item.to_record() for item in self.items],
            "delivery_fee": self.delivery_fee,
            "total_amount": self.total_amount,
            "status": self.status,
            "fulfillment_method": self.fulfillment_method,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
