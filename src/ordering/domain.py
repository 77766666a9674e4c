"""Ordering bounded context: storefront cart, checkout and the admin order desk.

Orders are standard CQRS aggregates persisted through Protean repositories.
The cart lives in the shopper's session and only becomes an Order at checkout.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
