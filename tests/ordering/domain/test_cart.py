"""Tests for the cart value types and their transitions."""

import pytest
from ordering.cart.cart import Cart, CartLine, MerchSnapshot, normalize_quantity
from protean.exceptions import ValidationError

SHIRT = MerchSnapshot(id="shirt-1", name="Shirt", price=500.0, sizes=("S", "M", "L"), image="/merch/shirt.png")
TOTE = MerchSnapshot(id="tote-1", name="Tote", price=350.0, sizes=("One Size",))


class TestAddLine:
    def test_add_to_empty_cart(self):
        cart = Cart().add_line(SHIRT, "M", 2)
        assert cart.lines == (
            CartLine(item_id="shirt-1", name="Shirt", price=500.0, size="M", quantity=2, image="/merch/shirt.png"),
        )

    def test_same_item_and_size_merges(self):
        cart = Cart().add_line(SHIRT, "M", 2).add_line(SHIRT, "M", 1)
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 3

    def test_different_size_adds_line(self):
        cart = Cart().add_line(SHIRT, "M", 1).add_line(SHIRT, "L", 1)
        assert [line.size for line in cart.lines] == ["M", "L"]

    def test_new_lines_are_appended(self):
        cart = Cart().add_line(SHIRT, "M", 1).add_line(TOTE, None, 1)
        assert [line.item_id for line in cart.lines] == ["shirt-1", "tote-1"]

    def test_single_size_item_needs_no_size(self):
        cart = Cart().add_line(TOTE, None, 1)
        assert cart.lines[0].size == "One Size"

    def test_missing_size_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Cart().add_line(SHIRT, None, 1)
        assert "size" in exc.value.messages

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Cart().add_line(SHIRT, "M", 0)
        assert "quantity" in exc.value.messages

    def test_original_cart_unchanged(self):
        cart = Cart()
        cart.add_line(SHIRT, "M", 1)
        assert cart.is_empty


class TestTotals:
    def test_count_and_subtotal(self):
        cart = Cart().add_line(SHIRT, "M", 2).add_line(TOTE, None, 1)
        assert cart.count == 3
        assert cart.subtotal == 1350.0

    def test_empty_cart(self):
        assert Cart().count == 0
        assert Cart().subtotal == 0


class TestRemoveLine:
    def test_remove_by_index(self):
        cart = Cart().add_line(SHIRT, "M", 1).add_line(TOTE, None, 1).remove_line(0)
        assert [line.item_id for line in cart.lines] == ["tote-1"]

    def test_out_of_range_is_noop(self):
        cart = Cart().add_line(SHIRT, "M", 1)
        assert cart.remove_line(5) == cart


class TestUpdateQuantity:
    def test_sets_quantity(self):
        cart = Cart().add_line(SHIRT, "M", 1).update_quantity(0, 4)
        assert cart.lines[0].quantity == 4

    def test_zero_drops_line(self):
        cart = Cart().add_line(SHIRT, "M", 1).update_quantity(0, 0)
        assert cart.is_empty

    def test_junk_input_drops_line(self):
        cart = Cart().add_line(SHIRT, "M", 1).update_quantity(0, "abc")
        assert cart.is_empty

    def test_out_of_range_is_noop(self):
        cart = Cart().add_line(SHIRT, "M", 1)
        assert cart.update_quantity(3, 2) == cart


class TestClear:
    def test_clear(self):
        assert Cart().add_line(SHIRT, "M", 1).clear().is_empty


class TestNormalizeQuantity:
    @pytest.mark.parametrize(
        "value, expected",
        [(3, 3), ("2", 2), (2.7, 2), (-4, 0), (None, 0), ("x", 0), (float("nan"), 0), (True, 0)],
    )
    def test_normalize(self, value, expected):
        assert normalize_quantity(value) == expected
