import json

import pytest
from catalogue.domain import catalogue
from catalogue.merch.management import AddMerchItem
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api.routes import admin_orders_router, admin_session_router, cart_router
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(admin_session_router)
    app.include_router(admin_orders_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def add_merch():
    def _add(name="Classic Tee", price=450.0, sizes=("S", "M", "L")):
        with catalogue.domain_context():
            return catalogue.process(
                AddMerchItem(name=name, price=price, sizes=json.dumps(list(sizes))),
                asynchronous=False,
            )

    return _add


@pytest.fixture()
def shirt_id(add_merch):
    return add_merch()


@pytest.fixture()
def checkout_form():
    return {
        "full_name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "09171234567",
        "payment_method": "gcash",
        "fulfillment_method": "pickup",
        "payment_reference": "GC-0001",
    }


@pytest.fixture()
def receipt_file():
    return {"receipt": ("receipt.png", b"\x89PNG....", "image/png")}
