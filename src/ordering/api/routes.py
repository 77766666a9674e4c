"""FastAPI routes for the Ordering domain: storefront carts, checkout and the admin desk."""

import structlog
from fastapi import APIRouter, File, Form, Header, UploadFile
from fastapi.responses import JSONResponse, Response

from catalogue.merch.listing import find_active_item
from ordering.admin.auth import FORBIDDEN, authenticate, bearer_token, sign_in, sign_out
from ordering.admin.export import export_csv
from ordering.admin.orders import fetch_order_records, update_order
from ordering.admin.views import OrderView, filter_orders
from ordering.api.schemas import (
    AddedToBagResponse,
    CartLineSchema,
    CartResponse,
    CheckoutResponse,
    LineQuantityRequest,
    SelectionRequest,
    SelectionResponse,
    SessionResponse,
    SignInRequest,
    UpdateOrderRequest,
)
from ordering.cart.cart import Cart, ItemSelection, MerchSnapshot
from ordering.cart.storage import load_cart, load_selection, save_cart, save_selection
from ordering.checkout.submission import submit_order
from ordering.checkout.validation import CheckoutForm, ReceiptUpload
from shared.settings import MAX_RECEIPT_SIZE

logger = structlog.get_logger(__name__)


def _cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        lines=[
            CartLineSchema(
                index=index,
                item_id=line.item_id,
                name=line.name,
                image=line.image,
                price=line.price,
                size=line.size,
                quantity=line.quantity,
                line_total=line.line_total,
            )
            for index, line in enumerate(cart.lines)
        ],
        count=cart.count,
        subtotal=cart.subtotal,
    )


def _selection_response(item_id: str, selection: ItemSelection) -> SelectionResponse:
    return SelectionResponse(item_id=item_id, quantity=selection.quantity, size=selection.size)


def _merch_snapshot(item_id: str) -> MerchSnapshot | None:
    item = find_active_item(item_id)
    return MerchSnapshot.from_card(item.to_card()) if item else None


def _item_not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "Item not found."})


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/{session_id}", response_model=CartResponse)
async def get_cart(session_id: str) -> CartResponse:
    return _cart_response(load_cart(session_id))


@cart_router.put("/{session_id}/selections/{item_id}", response_model=SelectionResponse)
def change_selection(session_id: str, item_id: str, body: SelectionRequest):
    item = _merch_snapshot(item_id)
    if item is None:
        return _item_not_found()

    selection = load_selection(session_id, item)
    if body.size is not None:
        selection = selection.select_size(body.size)
    if body.quantity is not None:
        selection = selection.set_quantity(body.quantity, item)
    if body.delta is not None:
        selection = selection.adjust_quantity(body.delta, item)

    save_selection(session_id, item.id, selection)
    return _selection_response(item.id, selection)


@cart_router.post("/{session_id}/selections/{item_id}/add", response_model=AddedToBagResponse)
def add_selection_to_bag(session_id: str, item_id: str):
    item = _merch_snapshot(item_id)
    if item is None:
        return _item_not_found()

    added = load_cart(session_id).add_selection(item, load_selection(session_id, item))
    save_cart(session_id, added.cart)
    save_selection(session_id, item.id, added.selection)
    return AddedToBagResponse(
        notice=added.notice,
        selection=_selection_response(item.id, added.selection),
        cart=_cart_response(added.cart),
    )


@cart_router.put("/{session_id}/lines/{index}", response_model=CartResponse)
async def change_line_quantity(session_id: str, index: int, body: LineQuantityRequest) -> CartResponse:
    cart = load_cart(session_id).update_quantity(index, body.quantity)
    save_cart(session_id, cart)
    return _cart_response(cart)


@cart_router.delete("/{session_id}/lines/{index}", response_model=CartResponse)
async def remove_line(session_id: str, index: int) -> CartResponse:
    cart = load_cart(session_id).remove_line(index)
    save_cart(session_id, cart)
    return _cart_response(cart)


@cart_router.delete("/{session_id}", response_model=CartResponse)
async def clear_cart(session_id: str) -> CartResponse:
    cart = load_cart(session_id).clear()
    save_cart(session_id, cart)
    return _cart_response(cart)


@cart_router.post("/{session_id}/checkout", status_code=201, response_model=CheckoutResponse)
def checkout(
    session_id: str,
    full_name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    payment_method: str = Form("gcash"),
    fulfillment_method: str = Form("pickup"),
    payment_reference: str = Form(""),
    street: str = Form(""),
    city: str = Form(""),
    province: str = Form(""),
    postal_code: str = Form(""),
    receipt: UploadFile | None = File(None),
):
    receipt_upload = None
    if receipt is not None:
        receipt_upload = ReceiptUpload(
            filename=receipt.filename,
            content_type=receipt.content_type,
            # One byte past the cap is enough to reject an oversized receipt.
            content=receipt.file.read(MAX_RECEIPT_SIZE + 1),
        )

    form = CheckoutForm(
        full_name=full_name,
        email=email,
        phone=phone,
        payment_method=payment_method,
        fulfillment_method=fulfillment_method,
        payment_reference=payment_reference,
        street=street,
        city=city,
        province=province,
        postal_code=postal_code,
    )
    result = submit_order(load_cart(session_id), form, receipt_upload)
    if not result.ok:
        status_code = 400 if result.kind == "validation" else 502
        return JSONResponse(status_code=status_code, content={"error": result.error})

    save_cart(session_id, Cart())
    return CheckoutResponse(order_id=result.order_id, email_error=result.email_error)


# ---------------------------------------------------------------------------
# Admin Session Router
# ---------------------------------------------------------------------------
admin_session_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_session_router.post("/session", response_model=SessionResponse)
def create_session(body: SignInRequest):
    result = sign_in(body.email, body.password)
    if not result.ok:
        return JSONResponse(status_code=401, content={"error": result.error})
    return SessionResponse(access_token=result.access_token)


@admin_session_router.delete("/session", status_code=204)
def end_session(authorization: str | None = Header(None)):
    sign_out(bearer_token(authorization))
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Admin Orders Router
# ---------------------------------------------------------------------------
admin_orders_router = APIRouter(prefix="/api/admin", tags=["admin"])

_REASON_STATUS = {
    "unauthorized": 401,
    FORBIDDEN: 403,
    "invalid": 400,
    "not_found": 404,
    "failed": 500,
}


def _auth_failure(authorization: str | None) -> JSONResponse | None:
    auth = authenticate(bearer_token(authorization))
    if auth.ok:
        return None
    return JSONResponse(status_code=_REASON_STATUS[auth.reason], content={"error": auth.error})


@admin_orders_router.get("/orders")
def get_orders(authorization: str | None = Header(None)):
    failure = _auth_failure(authorization)
    if failure is not None:
        return failure

    try:
        return {"orders": fetch_order_records()}
    except Exception as exc:
        logger.error("Loading orders failed", error=str(exc))
        return JSONResponse(status_code=500, content={"error": "Unable to load orders."})


@admin_orders_router.patch("/orders")
def patch_order(body: UpdateOrderRequest, authorization: str | None = Header(None)):
    changes = body.model_dump(exclude_none=True)
    result = update_order(bearer_token(authorization), changes)
    if not result.ok:
        return JSONResponse(status_code=_REASON_STATUS[result.reason], content={"error": result.error})

    content = {"ok": True}
    if result.email_error:
        content["emailError"] = result.email_error
    return content


@admin_orders_router.get("/orders.csv")
def download_orders_csv(
    q: str | None = None,
    status: str | None = "all",
    authorization: str | None = Header(None),
):
    failure = _auth_failure(authorization)
    if failure is not None:
        return failure

    try:
        records = fetch_order_records()
    except Exception as exc:
        logger.error("Loading orders failed", error=str(exc))
        return JSONResponse(status_code=500, content={"error": "Unable to load orders."})

    views = filter_orders([OrderView.from_record(record) for record in records], q, status)
    return Response(
        content=export_csv(views),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="orders.csv"'},
    )
