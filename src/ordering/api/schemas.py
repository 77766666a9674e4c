"""Pydantic request/response schemas for the storefront and admin APIs.

These are external contracts, kept apart from the Protean commands and the
cart value types.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    index: int
    item_id: str
    name: str
    image: str | None = None
    price: float
    size: str
    quantity: int
    line_total: float


class CartResponse(BaseModel):
    lines: list[CartLineSchema]
    count: int
    subtotal: float


class SelectionRequest(BaseModel):
    quantity: int | None = None
    delta: int | None = None
    size: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"delta": 1, "size": "M"}]}}


class SelectionResponse(BaseModel):
    item_id: str
    quantity: int
    size: str | None = None


class AddedToBagResponse(BaseModel):
    notice: str
    selection: SelectionResponse
    cart: CartResponse


class LineQuantityRequest(BaseModel):
    quantity: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutResponse(BaseModel):
    order_id: str
    email_error: str | None = None


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class SignInRequest(BaseModel):
    email: str
    password: str


class SessionResponse(BaseModel):
    access_token: str


class OrderLinePayload(BaseModel):
    item_id: str | None = None
    name: str
    size: str
    quantity: int = Field(ge=1)
    unit_price: float = Field(ge=0)
    line_total: float | None = None


class UpdateOrderRequest(BaseModel):
    id: str | None = None
    status: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    items: list[OrderLinePayload] | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [{"id": "8c1f5a8e-0000-4000-8000-000000000001", "status": "confirmed"}]
        }
    }
