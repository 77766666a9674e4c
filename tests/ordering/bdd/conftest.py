"""Shared BDD fixtures for the Ordering domain."""

import pytest
from ordering.cart.cart import Cart


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def bag():
    """The shopper's bag plus the pending selection on the merch card."""
    return {"cart": Cart(), "selection": None, "notice": None}
