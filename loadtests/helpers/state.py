"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, with no cross-user sharing.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks one simulated storefront session."""

    session_id: str
    item_ids: list[str] = field(default_factory=list)
    bag_count: int = 0
    order_id: str | None = None


@dataclass
class AdminState:
    """Tracks the operator session and the orders seen on the desk."""

    access_token: str | None = None
    order_ids: list[str] = field(default_factory=list)
