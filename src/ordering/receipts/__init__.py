"""Receipt storage factory.

Provides get_receipt_storage() / set_receipt_storage() to swap implementations:
- FakeReceiptStorage for development and testing (default)
- SupabaseReceiptStorage when MERCH_ADAPTERS=supabase
"""

from ordering.receipts.fake_adapter import FakeReceiptStorage
from ordering.receipts.port import ReceiptStorage
from shared.settings import adapter_mode, receipt_bucket

_current_storage: ReceiptStorage | None = None


def get_receipt_storage() -> ReceiptStorage:
    global _current_storage
    if _current_storage is None:
        if adapter_mode() == "supabase":
            from ordering.receipts.supabase_adapter import SupabaseReceiptStorage

            _current_storage = SupabaseReceiptStorage(bucket=receipt_bucket())
        else:
            _current_storage = FakeReceiptStorage(bucket=receipt_bucket())
    return _current_storage


def set_receipt_storage(storage: ReceiptStorage) -> None:
    """Override the active receipt storage (useful for tests)."""
    global _current_storage
    _current_storage = storage


def reset_receipt_storage() -> None:
    global _current_storage
    _current_storage = None
