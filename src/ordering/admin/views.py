"""Dashboard view-model over stored order records."""

from dataclasses import dataclass, field

from notifications.templates import summarize_items
from ordering.order.order import OrderStatus


def _number(value, default=0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _valid_lines(items) -> list[dict]:
    if not isinstance(items, list):
        return []
    lines = []
    for item in items:
        if not isinstance(item, dict):
            continue
        quantity = item.get("quantity")
        if not item.get("name") or not item.get("size"):
            continue
        if isinstance(quantity, bool) or not isinstance(quantity, int | float) or quantity <= 0:
            continue
        lines.append(item)
    return lines


@dataclass(frozen=True)
class OrderView:
    id: str
    customer: str
    email: str
    phone: str
    address: str
    payment_reference: str
    receipt_url: str
    fulfillment_method: str
    status: str
    created_at: str
    items: list = field(default_factory=list)
    item_count: int = 0
    subtotal: float = 0.0
    delivery_fee: float = 0.0
    total: float = 0.0
    items_summary: str = "No items"

    @classmethod
    def from_record(cls, record: dict) -> "OrderView":
        lines = _valid_lines(record.get("items"))
        subtotal = sum(
            _number(line.get("line_total"), _number(line.get("unit_price")) * line["quantity"]) for line in lines
        )
        delivery_fee = _number(record.get("delivery_fee"))
        return cls(
            id=str(record.get("id", "")),
            customer=record.get("full_name") or "",
            email=record.get("email") or "",
            phone=record.get("phone") or "",
            address=record.get("address") or "",
            payment_reference=record.get("payment_reference") or "",
            receipt_url=record.get("receipt_url") or "",
            fulfillment_method=record.get("fulfillment_method") or "",
            status=record.get("status") or OrderStatus.PENDING.value,
            created_at=record.get("created_at") or "",
            items=lines,
            item_count=int(sum(line["quantity"] for line in lines)),
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=_number(record.get("total_amount"), subtotal + delivery_fee),
            items_summary=summarize_items(lines),
        )


def filter_orders(views: list[OrderView], query: str | None = None, status: str | None = "all") -> list[OrderView]:
    """Case-insensitive search over id, customer, e-mail and items; exact status match unless ``all``."""
    needle = (query or "").strip().lower()
    wanted = (status or "all").strip().lower()

    matches = []
    for view in views:
        if wanted != "all" and view.status != wanted:
            continue
        if needle:
            haystack = " ".join((view.id, view.customer, view.email, view.items_summary)).lower()
            if needle not in haystack:
                continue
        matches.append(view)
    return matches


def order_stats(views: list[OrderView]) -> dict:
    return {
        "total_orders": len(views),
        "total_items": sum(view.item_count for view in views),
        "pending": sum(1 for view in views if view.status == OrderStatus.PENDING.value),
        "confirmed": sum(1 for view in views if view.status == OrderStatus.CONFIRMED.value),
    }
