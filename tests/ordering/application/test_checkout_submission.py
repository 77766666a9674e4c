"""Application tests for checkout submission."""

from unittest.mock import patch

import pytest
from ordering.cart.cart import Cart, MerchSnapshot
from ordering.checkout.submission import submit_order
from ordering.checkout.validation import CheckoutForm, ReceiptUpload
from ordering.order.order import Order
from protean import current_domain
from shared.settings import MAX_RECEIPT_SIZE

SHIRT = MerchSnapshot(id="shirt-1", name="Shirt", price=500.0, sizes=("S", "M"))


@pytest.fixture()
def cart():
    return Cart().add_line(SHIRT, "M", 2)


@pytest.fixture()
def form():
    return CheckoutForm(
        full_name="Ada Lovelace",
        email="ada@example.com",
        phone="09171234567",
        payment_reference="GC-0001",
    )


@pytest.fixture()
def receipt():
    return ReceiptUpload(filename="Receipt.PNG", content_type="image/png", content=b"\x89PNG....")


def _delivery(form):
    return CheckoutForm(
        **{
            **form.__dict__,
            "fulfillment_method": "delivery",
            "street": "1 Rizal St",
            "city": "Manila",
            "province": "Metro Manila",
            "postal_code": "1000",
        }
    )


class TestSubmitOrder:
    def test_success(self, cart, form, receipt, receipt_storage, email_channel):
        result = submit_order(cart, form, receipt)
        assert result.ok is True
        assert result.email_error is None

        order = current_domain.repository_for(Order).get(result.order_id)
        assert order.status == "pending"
        assert order.address == "pickup"
        assert order.total_amount == 1000.0
        assert order.items[0].line_total == 1000.0

    def test_receipt_uploaded_under_gcash_prefix(self, cart, form, receipt, receipt_storage, email_channel):
        result = submit_order(cart, form, receipt)
        [path] = receipt_storage.objects
        assert path.startswith("gcash/")
        assert path.endswith(".png")
        assert receipt_storage.objects[path]["content_type"] == "image/png"

        order = current_domain.repository_for(Order).get(result.order_id)
        assert order.receipt_url == f"memory://gcash-receipts/{path}"

    def test_delivery_fee_and_address(self, cart, form, receipt, receipt_storage, email_channel):
        result = submit_order(cart, _delivery(form), receipt, delivery_fee=50.0)
        order = current_domain.repository_for(Order).get(result.order_id)
        assert order.address == "1 Rizal St, Manila, Metro Manila 1000"
        assert order.delivery_fee == 50.0
        assert order.total_amount == 1050.0

    def test_pickup_ignores_delivery_fee(self, cart, form, receipt, receipt_storage, email_channel):
        result = submit_order(cart, form, receipt, delivery_fee=50.0)
        order = current_domain.repository_for(Order).get(result.order_id)
        assert order.delivery_fee == 0.0

    def test_configured_delivery_fee(self, cart, form, receipt, receipt_storage, email_channel, monkeypatch):
        monkeypatch.setenv("MERCH_DELIVERY_FEE", "75")
        result = submit_order(cart, _delivery(form), receipt)
        order = current_domain.repository_for(Order).get(result.order_id)
        assert order.total_amount == 1075.0

    def test_pending_mail_sent(self, cart, form, receipt, receipt_storage, email_channel):
        result = submit_order(cart, form, receipt)
        [mail] = email_channel.sent_emails
        assert mail["to"] == "ada@example.com"
        assert mail["subject"] == f"Order {result.order_id} status update"
        assert "Status: PENDING" in mail["body"]

    def test_mail_failure_is_not_fatal(self, cart, form, receipt, receipt_storage, email_channel):
        email_channel.configure(should_succeed=False, failure_reason="SMTP down")
        result = submit_order(cart, form, receipt)
        assert result.ok is True
        assert result.email_error == "SMTP down"


class TestSubmitOrderFailures:
    def test_validation_failure_touches_nothing(self, form, receipt, receipt_storage, email_channel):
        result = submit_order(Cart(), form, receipt)
        assert result.ok is False
        assert result.error == "Add items to your bag before submitting."
        assert receipt_storage.calls == []
        assert email_channel.sent_emails == []

    def test_non_image_not_uploaded(self, cart, form, receipt_storage):
        pdf = ReceiptUpload(filename="receipt.pdf", content_type="application/pdf", content=b"%PDF")
        result = submit_order(cart, form, pdf)
        assert result.error == "Receipt must be an image file."
        assert receipt_storage.calls == []

    def test_oversized_receipt_not_uploaded(self, cart, form, receipt_storage):
        big = ReceiptUpload(filename="r.jpg", content_type="image/jpeg", content=b"0" * (MAX_RECEIPT_SIZE + 1))
        result = submit_order(cart, form, big)
        assert result.error == "Receipt image must be under 5MB."
        assert receipt_storage.calls == []

    def test_receipt_key_ignores_path_in_file_name(self, cart, form, receipt_storage, email_channel):
        sneaky = ReceiptUpload(filename="x.png/../a", content_type="image/png", content=b"\x89PNG")
        assert submit_order(cart, form, sneaky).ok is True

        [path] = receipt_storage.objects
        assert path.startswith("gcash/")
        assert path.endswith(".jpg")
        assert ".." not in path

    def test_upload_failure(self, cart, form, receipt, receipt_storage, email_channel):
        receipt_storage.configure(should_succeed=False)
        result = submit_order(cart, form, receipt)
        assert result.ok is False
        assert result.error == "Unable to upload receipt. Please try again."
        assert result.kind == "upstream"
        assert email_channel.sent_emails == []

    def test_insert_failure(self, cart, form, receipt, receipt_storage, email_channel):
        with patch("ordering.checkout.submission.current_domain") as domain:
            domain.process.side_effect = RuntimeError("database unavailable")
            result = submit_order(cart, form, receipt)
        assert result.ok is False
        assert result.error == "Unable to submit order. Please try again."
        assert email_channel.sent_emails == []
        # receipt stays behind
        assert len(receipt_storage.objects) == 1
