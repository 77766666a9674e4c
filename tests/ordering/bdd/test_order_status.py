"""BDD tests for admin status updates."""

import pytest
from ordering.admin.orders import update_order
from ordering.cart.cart import Cart, MerchSnapshot
from ordering.checkout.submission import submit_order
from ordering.checkout.validation import CheckoutForm, ReceiptUpload
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_status.feature")


@pytest.fixture()
def outcome():
    return {"result": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an admin is signed in", target_fixture="token")
def _(admin_token):
    return admin_token


@given(parsers.cfparse('a pending order for "{email}"'), target_fixture="order_id")
def _(email, receipt_storage, email_channel):
    shirt = MerchSnapshot(id="shirt-1", name="Shirt", price=500.0, sizes=("M",))
    result = submit_order(
        Cart().add_line(shirt, "M", 1),
        CheckoutForm(full_name="Ada Lovelace", email=email, phone="09171234567", payment_reference="GC-1"),
        ReceiptUpload(filename="receipt.jpg", content_type="image/jpeg", content=b"jpeg"),
    )
    email_channel.reset()
    return result.order_id


@given("the mail service is down")
def _(email_channel):
    email_channel.configure(should_succeed=False, failure_reason="SMTP down")


@given(parsers.cfparse('the deployment uses the "{name}" status set'))
def _(monkeypatch, name):
    monkeypatch.setenv("MERCH_STATUS_SET", name)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the admin sets the status to "{status}"'))
def _(token, order_id, outcome, status):
    outcome["result"] = update_order(token, {"id": order_id, "status": status})


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the update succeeds")
def _(outcome):
    assert outcome["result"].ok is True
    assert outcome["result"].email_error is None


@then("the update succeeds with an e-mail warning")
def _(outcome):
    assert outcome["result"].ok is True
    assert outcome["result"].email_error == "SMTP down"


@then(parsers.cfparse('the update fails with "{message}"'))
def _(outcome, message):
    assert outcome["result"].ok is False
    assert outcome["result"].error == message


@then(parsers.cfparse('the order status is "{status}"'))
def _(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then(parsers.cfparse('{count:d} status e-mail is sent to "{email}"'))
def _(email_channel, count, email):
    assert len(email_channel.sent_emails) == count
    assert all(mail["to"] == email for mail in email_channel.sent_emails)


@then("no status e-mail is sent")
def _(email_channel):
    assert email_channel.sent_emails == []


@then(parsers.cfparse('the e-mail mentions "{text}"'))
def _(email_channel, text):
    assert text in email_channel.sent_emails[-1]["body"]
