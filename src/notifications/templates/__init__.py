"""Email templates for customer-facing order mail."""

from notifications.templates.order_status import OrderStatusTemplate, summarize_items

__all__ = ["OrderStatusTemplate", "summarize_items"]
