"""Order mail dispatch.

Mail is a side effect of checkout and of admin status changes. It must never
undo or fail those actions, so every failure is returned as an
``EmailOutcome`` instead of being raised.
"""

from dataclasses import dataclass

import structlog

from notifications.channel import get_email_channel
from notifications.channel.email_port import SENT
from notifications.templates import OrderStatusTemplate

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EmailOutcome:
    ok: bool
    error: str | None = None
    message_id: str | None = None


def send_order_status_email(
    order: dict,
    status: str,
    include_status_line: bool = True,
    fulfillment_note: str | None = None,
) -> EmailOutcome:
    """Send the status mail for an order snapshot (``id``, ``email``, ``full_name``, ``items``)."""
    recipient = order.get("email")
    if not recipient:
        return EmailOutcome(ok=False, error="Order has no e-mail address.")

    try:
        content = OrderStatusTemplate.render(
            order,
            status,
            include_status_line=include_status_line,
            fulfillment_note=fulfillment_note,
        )
        result = get_email_channel().send(
            to=recipient,
            subject=content["subject"],
            body=content["body"],
            html_body=content["html_body"],
        )
    except Exception as exc:
        logger.error("Order mail failed", order_id=str(order.get("id")), status=status, error=str(exc))
        return EmailOutcome(ok=False, error=str(exc) or "Unable to send order e-mail.")

    if result.get("status") != SENT:
        error = result.get("error") or "Unable to send order e-mail."
        logger.warning("Order mail not sent", order_id=str(order.get("id")), status=status, error=error)
        return EmailOutcome(ok=False, error=error)

    logger.info("Order mail sent", order_id=str(order.get("id")), status=status)
    return EmailOutcome(ok=True, message_id=result.get("message_id"))
