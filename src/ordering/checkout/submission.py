"""Checkout submission: receipt upload, order persistence and the pending mail."""

import json
import uuid
from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from notifications.dispatch import send_order_status_email
from ordering.cart.cart import Cart
from ordering.checkout.validation import CheckoutForm, ReceiptUpload, validate_checkout
from ordering.domain import ordering
from ordering.order.creation import PlaceOrder
from ordering.order.order import PICKUP_ADDRESS, Order, OrderStatus
from ordering.receipts import get_receipt_storage
from shared.settings import delivery_fee as configured_delivery_fee

logger = structlog.get_logger(__name__)

UPLOAD_FAILED = "Unable to upload receipt. Please try again."
SUBMIT_FAILED = "Unable to submit order. Please try again."


@dataclass(frozen=True)
class CheckoutResult:
    ok: bool
    order_id: str | None = None
    error: str | None = None
    email_error: str | None = None
    # ``validation`` for form problems; ``upstream`` when a collaborator failed
    kind: str | None = None


def receipt_path(receipt: ReceiptUpload) -> str:
    return f"gcash/{uuid.uuid4()}.{receipt.extension}"


def order_lines(cart: Cart) -> list[dict]:
    return [
        {
            "item_id": line.item_id,
            "name": line.name,
            "size": line.size,
            "quantity": line.quantity,
            "unit_price": line.price,
            "line_total": line.line_total,
        }
        for line in cart.lines
    ]


def submit_order(
    cart: Cart,
    form: CheckoutForm,
    receipt: ReceiptUpload | None,
    delivery_fee: float | None = None,
) -> CheckoutResult:
    """Validate, upload the receipt, persist the order and send the pending mail.

    Nothing is uploaded or stored when validation fails. The mail is best
    effort: a failure is reported in ``email_error`` next to a successful
    result.
    """
    error = validate_checkout(cart, form, receipt)
    if error:
        return CheckoutResult(ok=False, error=error, kind="validation")

    storage = get_receipt_storage()
    path = receipt_path(receipt)
    try:
        upload = storage.upload(path, receipt.content, receipt.content_type)
    except Exception as exc:
        logger.error("Receipt upload raised", path=path, error=str(exc))
        return CheckoutResult(ok=False, error=UPLOAD_FAILED, kind="upstream")
    if not upload.success:
        logger.warning("Receipt upload rejected", path=path, reason=upload.failure_reason)
        return CheckoutResult(ok=False, error=UPLOAD_FAILED, kind="upstream")

    fee = 0.0
    if form.is_delivery:
        fee = configured_delivery_fee() if delivery_fee is None else delivery_fee

    try:
        receipt_url = storage.public_url(upload.path or path)
        with ordering.domain_context():
            order_id = current_domain.process(
                PlaceOrder(
                    full_name=form.full_name.strip(),
                    email=form.email.strip(),
                    phone=form.phone.strip(),
                    address=form.delivery_address() if form.is_delivery else PICKUP_ADDRESS,
                    fulfillment_method=form.fulfillment_method,
                    payment_reference=form.payment_reference.strip(),
                    receipt_url=receipt_url,
                    items=json.dumps(order_lines(cart)),
                    delivery_fee=fee,
                    total_amount=cart.subtotal + fee,
                ),
                asynchronous=False,
            )
            order = current_domain.repository_for(Order).get(order_id)
            snapshot = order.to_record()
    except Exception as exc:
        # The uploaded receipt stays in the bucket without an order.
        logger.error("Order insert failed", receipt_path=path, error=str(exc))
        return CheckoutResult(ok=False, error=SUBMIT_FAILED, kind="upstream")

    logger.info("Order placed", order_id=order_id, total=snapshot["total_amount"])

    outcome = send_order_status_email(snapshot, OrderStatus.PENDING.value)
    return CheckoutResult(ok=True, order_id=order_id, email_error=outcome.error)
