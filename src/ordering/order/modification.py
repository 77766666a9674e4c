"""Admin order corrections: command and handler.

Only the fields present on the command are applied; everything else on the
stored order is left untouched.
"""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class UpdateOrder:
    order_id = Identifier(required=True)
    status = String(max_length=20)
    email = String(max_length=254)
    phone = String(max_length=50)
    address = Text()
    items = Text()  # JSON: replacement list of line dicts


@ordering.command_handler(part_of=Order)
class UpdateOrderHandler:
    @handle(UpdateOrder)
    def update_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        items_data = json.loads(command.items) if isinstance(command.items, str) and command.items else None
        order.update_details(
            email=command.email,
            phone=command.phone,
            address=command.address,
            items_data=items_data,
        )
        if command.status:
            order.change_status(command.status)

        repo.add(order)
