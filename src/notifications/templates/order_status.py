"""Order status template: sent at checkout and whenever an operator changes the status."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

_environment = Environment(
    loader=FileSystemLoader(Path(__file__).parent),
    autoescape=select_autoescape(["html"]),
)

INTRO_LINE = (
    "We are delighted to confirm that your Arduino Day Official Merchandise order has been successfully placed."
)
PREP_LINE = "Our team is currently preparing your items with the utmost care."


def summarize_items(items) -> str:
    """``Name (Size) xN · ...``; malformed lines are skipped."""
    if not isinstance(items, list) or not items:
        return "No items"

    parts = []
    for item in items:
        if not isinstance(item, dict):
            continue
        name = str(item.get("name") or "").strip()
        size = str(item.get("size") or "").strip()
        quantity = item.get("quantity")
        if not name or not size or not isinstance(quantity, int | float) or quantity <= 0:
            continue
        parts.append(f"{name} ({size}) x{quantity:g}")

    return " · ".join(parts) or "No items"


class OrderStatusTemplate:
    html_template = "order_status.html"

    @classmethod
    def render(
        cls,
        order: dict,
        status: str,
        include_status_line: bool = True,
        fulfillment_note: str | None = None,
    ) -> dict:
        """Render subject, plain-text body and HTML body for an order snapshot.

        ``order`` needs ``id``, ``full_name`` and ``items``.
        """
        order_id = str(order.get("id", "N/A"))
        items_summary = summarize_items(order.get("items"))
        status_label = str(status).upper()

        lines = [
            INTRO_LINE,
            "",
            PREP_LINE,
            "",
            f"Order Reference: {order_id}",
            f"Items: {items_summary}",
        ]
        if include_status_line:
            lines.append(f"Status: {status_label}")
        if fulfillment_note:
            lines.extend(["", fulfillment_note])

        html_body = _environment.get_template(cls.html_template).render(
            recipient=order.get("full_name") or "Customer",
            order_id=order_id,
            order_items=items_summary,
            intro_line=INTRO_LINE,
            prep_line=PREP_LINE,
            status_label=status_label if include_status_line else None,
            fulfillment_note=fulfillment_note,
        )

        return {
            "subject": f"Order {order_id} status update",
            "body": "\n".join(lines),
            "html_body": html_body,
        }
