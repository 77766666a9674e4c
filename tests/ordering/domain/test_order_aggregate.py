"""Tests for the Order aggregate."""

import pytest
from ordering.order.events import OrderDetailsUpdated, OrderPlaced, OrderStatusChanged
from ordering.order.order import GCASH, Order, OrderStatus
from protean.exceptions import ValidationError


def _place(**overrides):
    defaults = {
        "full_name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "09171234567",
        "address": "pickup",
        "fulfillment_method": "pickup",
        "payment_reference": "GC-0001",
        "receipt_url": "memory://gcash-receipts/gcash/receipt.jpg",
        "items_data": [
            {"item_id": "shirt-1", "name": "Shirt", "size": "M", "quantity": 2, "unit_price": 500.0},
        ],
    }
    defaults.update(overrides)
    return Order.place(**defaults)


class TestPlaceOrder:
    def test_starts_pending(self):
        assert _place().status == OrderStatus.PENDING.value

    def test_payment_method_is_gcash(self):
        assert _place().payment_method == GCASH

    def test_line_total_defaults_to_quantity_times_price(self):
        order = _place()
        assert order.items[0].line_total == 1000.0

    def test_total_defaults_to_subtotal_plus_fee(self):
        order = _place(fulfillment_method="delivery", address="1 Rizal St, Manila", delivery_fee=50.0)
        assert order.total_amount == 1050.0

    def test_caller_total_is_kept(self):
        assert _place(total_amount=1200.0).total_amount == 1200.0

    def test_camel_case_lines_accepted(self):
        line = {"itemId": "tote-1", "name": "Tote", "size": "One Size", "quantity": 1, "unitPrice": 350.0}
        order = _place(items_data=[line])
        assert order.items[0].item_id == "tote-1"
        assert order.items[0].unit_price == 350.0

    def test_requires_items(self):
        with pytest.raises(ValidationError) as exc:
            _place(items_data=[])
        assert "items" in exc.value.messages

    def test_rejects_unknown_fulfillment(self):
        with pytest.raises(ValidationError):
            _place(fulfillment_method="drone")

    def test_rejects_zero_quantity_line(self):
        with pytest.raises(ValidationError):
            _place(items_data=[{"name": "Shirt", "size": "M", "quantity": 0, "unit_price": 500.0}])

    def test_raises_order_placed(self):
        order = _place()
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.item_count == 2
        assert event.total_amount == 1000.0

    def test_derived_values(self):
        order = _place(
            items_data=[
                {"name": "Shirt", "size": "M", "quantity": 2, "unit_price": 500.0},
                {"name": "Tote", "size": "One Size", "quantity": 1, "unit_price": 350.0},
            ]
        )
        assert order.item_count == 3
        assert order.subtotal == 1350.0


class TestChangeStatus:
    def test_change_status(self):
        order = _place()
        order._events.clear()
        assert order.change_status("paid") is True
        assert order.status == OrderStatus.PAID.value
        event = order._events[0]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "pending"
        assert event.new_status == "paid"

    def test_same_status_is_noop(self):
        order = _place()
        order._events.clear()
        assert order.change_status("pending") is False
        assert order._events == []

    def test_any_status_may_follow_any_other(self):
        order = _place()
        order.change_status(OrderStatus.DELIVERED)
        order.change_status(OrderStatus.PACKING)
        assert order.status == "packing"

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place().change_status("lost")
        assert exc.value.messages == {"status": ["Unknown order status."]}


class TestUpdateDetails:
    def test_only_supplied_fields_change(self):
        order = _place()
        order.update_details(phone="09998887777")
        assert order.phone == "09998887777"
        assert order.email == "ada@example.com"

    def test_items_replaced(self):
        order = _place()
        order.update_details(items_data=[{"name": "Tote", "size": "One Size", "quantity": 3, "unit_price": 350.0}])
        assert [item.name for item in order.items] == ["Tote"]
        assert order.item_count == 3

    def test_raises_details_updated(self):
        order = _place()
        order._events.clear()
        order.update_details(email="ada@lovelace.dev", address="2 Mabini St")
        event = order._events[0]
        assert isinstance(event, OrderDetailsUpdated)
        assert event.changed_fields == "email,address"

    def test_nothing_supplied_raises_nothing(self):
        order = _place()
        order._events.clear()
        order.update_details()
        assert order._events == []


class TestRecord:
    def test_record_shape(self):
        record = _place().to_record()
        assert record["status"] == "pending"
        assert record["items"][0] == {
            "item_id": "shirt-1",
            "name": "Shirt",
            "size": "M",
            "quantity": 2,
            "unit_price": 500.0,
            "line_total": 1000.0,
        }
        assert record["created_at"] is not None
