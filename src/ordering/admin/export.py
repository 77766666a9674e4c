"""CSV export of the admin order list."""

import csv
import io

from ordering.admin.views import OrderView

CSV_HEADER = (
    "Order ID",
    "Customer",
    "Email",
    "Phone",
    "Address",
    "Items",
    "Item Count",
    "Delivery Fee",
    "Total",
    "GCash Ref",
    "Receipt URL",
    "Fulfillment",
    "Status",
    "Date",
)


def _amount(value: float) -> str:
    return f"{value:g}"


def export_row(view: OrderView) -> list[str]:
    return [
        view.id,
        view.customer,
        view.email,
        view.phone,
        view.address,
        view.items_summary,
        str(view.item_count),
        _amount(view.delivery_fee),
        _amount(view.total),
        view.payment_reference,
        view.receipt_url,
        view.fulfillment_method,
        view.status,
        view.created_at,
    ]


def export_csv(views: list[OrderView]) -> str:
    """Header plus one row per order; fields with commas, quotes or newlines are quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for view in views:
        writer.writerow(export_row(view))
    return buffer.getvalue()
