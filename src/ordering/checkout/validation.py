"""Checkout form validation.

Checks run in a fixed order and stop at the first failure; the message is
shown to the shopper as-is.
"""

import re
from dataclasses import dataclass

from ordering.cart.cart import Cart
from ordering.order.order import GCASH, FulfillmentMethod
from shared.settings import MAX_RECEIPT_SIZE

_EXTENSION = re.compile(r"[a-z0-9]{1,8}")

DELIVERY_ADDRESS_FIELDS = ("street", "city", "province", "postal_code")


@dataclass(frozen=True)
class CheckoutForm:
    full_name: str = ""
    email: str = ""
    phone: str = ""
    payment_method: str = GCASH
    fulfillment_method: str = FulfillmentMethod.PICKUP.value
    payment_reference: str = ""
    street: str = ""
    city: str = ""
    province: str = ""
    postal_code: str = ""

    @property
    def is_delivery(self) -> bool:
        return self.fulfillment_method == FulfillmentMethod.DELIVERY.value

    def delivery_address(self) -> str:
        """``street, city, province postal_code``"""
        locality = " ".join(part for part in (self.province.strip(), self.postal_code.strip()) if part)
        return ", ".join(part for part in (self.street.strip(), self.city.strip(), locality) if part)


@dataclass(frozen=True)
class ReceiptUpload:
    filename: str | None
    content_type: str | None
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content or b"")

    @property
    def extension(self) -> str:
        """Lower-cased file extension, or ``jpg`` when absent or not a plain short token."""
        name = self.filename or ""
        if "." not in name:
            return "jpg"
        extension = name.rsplit(".", 1)[1].lower()
        return extension if _EXTENSION.fullmatch(extension) else "jpg"


def _blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_checkout(cart: Cart, form: CheckoutForm, receipt: ReceiptUpload | None) -> str | None:
    """Return the first failing message, or ``None`` when the checkout may proceed."""
    if cart.is_empty:
        return "Add items to your bag before submitting."

    required = [form.full_name, form.email, form.phone]
    if form.is_delivery:
        required.extend(getattr(form, name) for name in DELIVERY_ADDRESS_FIELDS)
    if any(_blank(value) for value in required):
        return "Please complete all fields."

    if form.payment_method != GCASH:
        return "Select GCash as your payment method."

    if form.fulfillment_method not in {method.value for method in FulfillmentMethod}:
        return "Select pickup or delivery."

    if _blank(form.payment_reference):
        return "Enter your GCash reference number."

    if receipt is None or receipt.size == 0:
        return "Upload your GCash receipt."

    if not (receipt.content_type or "").startswith("image/"):
        return "Receipt must be an image file."

    if receipt.size > MAX_RECEIPT_SIZE:
        return "Receipt image must be under 5MB."

    return None
