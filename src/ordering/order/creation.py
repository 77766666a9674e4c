"""Order placement: command and handler."""

import json

from protean import handle
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class PlaceOrder:
    full_name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=50)
    address = Text(required=True)
    fulfillment_method = String(required=True, max_length=20)
    payment_reference = String(required=True, max_length=255)
    receipt_url = String(required=True, max_length=2048)
    items = Text(required=True)  # JSON: list of line dicts
    delivery_fee = Float(default=0.0)
    total_amount = Float(required=True)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        order = Order.place(
            full_name=command.full_name,
            email=command.email,
            phone=command.phone,
            address=command.address,
            fulfillment_method=command.fulfillment_method,
            payment_reference=command.payment_reference,
            receipt_url=command.receipt_url,
            items_data=items_data,
            delivery_fee=command.delivery_fee or 0.0,
            total_amount=command.total_amount,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
