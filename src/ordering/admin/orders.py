"""Admin order desk: list every order and apply operator updates.

Both operations re-check the bearer token on every call and report problems
as result values. Nothing here raises to the caller.
"""

import json
from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from notifications.dispatch import send_order_status_email
from ordering.admin.auth import authenticate
from ordering.domain import ordering
from ordering.order.modification import UpdateOrder
from ordering.order.order import Order, parse_status

logger = structlog.get_logger(__name__)

_PAGE_SIZE = 100

UPDATABLE_FIELDS = ("status", "email", "phone", "address", "items")


@dataclass(frozen=True)
class UpdateResult:
    ok: bool
    error: str | None = None
    email_error: str | None = None
    # unauthorized | forbidden | invalid | not_found | failed
    reason: str | None = None


def fetch_order_records() -> list[dict]:
    """Every stored order as a record, newest first."""
    with ordering.domain_context():
        repo = current_domain.repository_for(Order)
        orders, offset = [], 0
        while True:
            page = repo._dao.query.order_by("-created_at").offset(offset).limit(_PAGE_SIZE).all()
            orders.extend(page.items)
            if not page.has_next:
                break
            offset += _PAGE_SIZE
        records = [order.to_record() for order in orders]

    return sorted(records, key=lambda record: record["created_at"] or "", reverse=True)


def list_orders(token: str | None) -> dict:
    auth = authenticate(token)
    if not auth.ok:
        return {"error": auth.error}

    try:
        return {"orders": fetch_order_records()}
    except Exception as exc:
        logger.error("Loading orders failed", error=str(exc))
        return {"error": "Unable to load orders."}


def _supplied(changes: dict, name: str):
    value = changes.get(name)
    if isinstance(value, str):
        value = value.strip()
    return value or None


def update_order(token: str | None, changes: dict) -> UpdateResult:
    """Apply the supplied fields among status, email, phone, address and items.

    A status mail goes out only when a status was supplied and differs from
    the stored one. A failed mail still yields ``ok=True`` with
    ``email_error`` set.
    """
    auth = authenticate(token)
    if not auth.ok:
        return UpdateResult(ok=False, error=auth.error, reason=auth.reason)

    changes = changes or {}
    order_id = changes.get("id")
    if not isinstance(order_id, str) or not order_id.strip():
        return UpdateResult(ok=False, error="Missing order id.", reason="invalid")
    order_id = order_id.strip()

    updates = {name: _supplied(changes, name) for name in UPDATABLE_FIELDS}
    if updates["status"] is not None:
        try:
            updates["status"] = parse_status(updates["status"]).value
        except ValidationError:
            return UpdateResult(ok=False, error="Unknown order status.", reason="invalid")

    with ordering.domain_context():
        try:
            existing = current_domain.repository_for(Order).get(order_id)
        except ObjectNotFoundError:
            return UpdateResult(ok=False, error="Order not found.", reason="not_found")
        except Exception as exc:
            logger.error("Loading order failed", order_id=order_id, error=str(exc))
            return UpdateResult(ok=False, error="Order not found.", reason="not_found")

        # The mail describes the order as it was before this update.
        snapshot = existing.to_record()

        try:
            current_domain.process(
                UpdateOrder(
                    order_id=order_id,
                    status=updates["status"],
                    email=updates["email"],
                    phone=updates["phone"],
                    address=updates["address"],
                    items=json.dumps(updates["items"]) if updates["items"] else None,
                ),
                asynchronous=False,
            )
        except Exception as exc:
            logger.error("Order update failed", order_id=order_id, error=str(exc))
            return UpdateResult(ok=False, error="Unable to update order status.", reason="failed")

    status = updates["status"]
    if status is None or status == snapshot["status"]:
        return UpdateResult(ok=True)

    logger.info("Order status changed", order_id=order_id, previous=snapshot["status"], status=status)
    outcome = send_order_status_email(snapshot, status)
    return UpdateResult(ok=True, email_error=outcome.error)
