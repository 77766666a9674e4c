"""Supabase Storage adapter for payment receipts."""

import structlog

from ordering.receipts.port import ReceiptStorage, UploadResult
from shared.supabase import get_client

logger = structlog.get_logger(__name__)


class SupabaseReceiptStorage(ReceiptStorage):
    def __init__(self, bucket: str) -> None:
        self.bucket = bucket

    def upload(self, path: str, content: bytes, content_type: str) -> UploadResult:
        try:
            get_client().storage.from_(self.bucket).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type},
            )
        except Exception as exc:
            logger.error("Receipt upload failed", bucket=self.bucket, path=path, error=str(exc))
            return UploadResult(success=False, failure_reason=str(exc))
        return UploadResult(success=True, path=path)

    def public_url(self, path: str) -> str:
        return get_client().storage.from_(self.bucket).get_public_url(path)
