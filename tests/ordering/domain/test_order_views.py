"""Tests for the admin dashboard view-model and the CSV export."""

from ordering.admin.export import CSV_HEADER, export_csv
from ordering.admin.views import OrderView, filter_orders, order_stats


def _record(**overrides):
    record = {
        "id": "ord-1",
        "full_name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "09171234567",
        "address": "pickup",
        "payment_reference": "GC-0001",
        "receipt_url": "memory://gcash-receipts/gcash/a.jpg",
        "items": [
            {"name": "Shirt", "size": "M", "quantity": 2, "unit_price": 500.0, "line_total": 1000.0},
            {"name": "Tote", "size": "One Size", "quantity": 1, "unit_price": 350.0, "line_total": 350.0},
        ],
        "delivery_fee": 0.0,
        "total_amount": 1350.0,
        "status": "pending",
        "fulfillment_method": "pickup",
        "created_at": "2026-03-21T08:00:00+00:00",
    }
    record.update(overrides)
    return record


class TestOrderView:
    def test_derived_values(self):
        view = OrderView.from_record(_record())
        assert view.item_count == 3
        assert view.subtotal == 1350.0
        assert view.total == 1350.0
        assert view.items_summary == "Shirt (M) x2 · Tote (One Size) x1"

    def test_malformed_lines_dropped(self):
        view = OrderView.from_record(_record(items=[{"name": "Shirt", "size": "M", "quantity": 0}, "junk"]))
        assert view.items == []
        assert view.items_summary == "No items"

    def test_total_falls_back_to_subtotal_plus_fee(self):
        view = OrderView.from_record(_record(total_amount=None, delivery_fee=50))
        assert view.total == 1400.0

    def test_line_total_falls_back_to_price(self):
        view = OrderView.from_record(_record(items=[{"name": "Shirt", "size": "M", "quantity": 2, "unit_price": 500}]))
        assert view.subtotal == 1000.0


class TestFilterOrders:
    def setup_method(self):
        self.views = [
            OrderView.from_record(_record()),
            OrderView.from_record(
                _record(id="ord-2", full_name="Grace Hopper", email="grace@example.com", status="confirmed")
            ),
        ]

    def test_no_filters(self):
        assert filter_orders(self.views) == self.views

    def test_query_is_case_insensitive(self):
        assert [view.id for view in filter_orders(self.views, "GRACE")] == ["ord-2"]

    def test_query_matches_items(self):
        assert len(filter_orders(self.views, "tote")) == 2

    def test_status_filter(self):
        assert [view.id for view in filter_orders(self.views, status="confirmed")] == ["ord-2"]

    def test_stats(self):
        assert order_stats(self.views) == {"total_orders": 2, "total_items": 6, "pending": 1, "confirmed": 1}


class TestExportCsv:
    def test_header(self):
        assert export_csv([]).splitlines()[0] == ",".join(CSV_HEADER)

    def test_fields_with_commas_are_quoted(self):
        view = OrderView.from_record(_record(address="123 Main, St", fulfillment_method="delivery"))
        row = export_csv([view]).splitlines()[1]
        assert '"123 Main, St"' in row

    def test_row_values(self):
        row = export_csv([OrderView.from_record(_record())]).splitlines()[1]
        assert row.startswith("ord-1,Ada Lovelace,ada@example.com,09171234567,pickup,")
        assert ",3,0,1350,GC-0001," in row
