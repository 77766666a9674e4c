"""Receipt storage port (abstract interface).

Payment receipts are uploaded to object storage; only the public URL ends up
on the order. Adapters: ``FakeReceiptStorage`` for development and tests,
``SupabaseReceiptStorage`` for production.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class UploadResult:
    """Result of a receipt upload attempt."""

    success: bool
    path: str | None = None
    failure_reason: str | None = None


class ReceiptStorage(ABC):
    """Abstract object-storage interface for payment receipts."""

    @abstractmethod
    def upload(self, path: str, content: bytes, content_type: str) -> UploadResult:
        """Store ``content`` under ``path`` in the receipts bucket."""
        ...

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Public URL for a stored path."""
        ...
