"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass checkout validation and match the
form field names the checkout endpoint expects.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_PH")

# Smallest valid PNG: 1x1 transparent pixel
RECEIPT_PNG = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c63000100000500010d0a2db40000000049454e44ae426082"
)

STATUSES = ["paid", "confirmed", "packing", "shipped", "intransit", "delivered"]


def session_id() -> str:
    return f"lt-{uuid.uuid4().hex[:12]}"


def gcash_reference() -> str:
    """13-digit reference like the ones printed on GCash receipts."""
    return "".join(random.choices("0123456789", k=13))


def mobile_number() -> str:
    return f"09{random.randint(100000000, 999999999)}"


def checkout_form(delivery: bool | None = None) -> dict:
    """Form fields for POST /carts/{session}/checkout."""
    delivery = random.random() < 0.4 if delivery is None else delivery
    form = {
        "full_name": fake.name()[:255],
        "email": f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}",
        "phone": mobile_number(),
        "payment_method": "gcash",
        "fulfillment_method": "delivery" if delivery else "pickup",
        "payment_reference": gcash_reference(),
    }
    if delivery:
        form.update(
            street=fake.street_address()[:255],
            city=fake.city()[:100],
            province=fake.province(),
            postal_code=fake.postcode()[:20],
        )
    return form


def receipt_file() -> dict:
    return {"receipt": (f"receipt-{uuid.uuid4().hex[:6]}.png", RECEIPT_PNG, "image/png")}


def next_status() -> str:
    return random.choice(STATUSES)
