"""In-memory receipt storage for development and testing."""

from ordering.receipts.port import ReceiptStorage, UploadResult


class FakeReceiptStorage(ReceiptStorage):
    """Keeps uploaded blobs in memory; can be told to fail."""

    def __init__(self, bucket: str = "gcash-receipts") -> None:
        self.bucket = bucket
        self.objects: dict[str, dict] = {}
        self.should_succeed: bool = True
        self.failure_reason: str = "Storage unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Storage unavailable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def upload(self, path: str, content: bytes, content_type: str) -> UploadResult:
        self.calls.append({"method": "upload", "path": path, "size": len(content), "content_type": content_type})

        if not self.should_succeed:
            return UploadResult(success=False, failure_reason=self.failure_reason)
        if path in self.objects:
            return UploadResult(success=False, failure_reason="The resource already exists")

        self.objects[path] = {"content": content, "content_type": content_type}
        return UploadResult(success=True, path=path)

    def public_url(self, path: str) -> str:
        return f"memory://{self.bucket}/{path}"

    def reset(self) -> None:
        self.objects.clear()
        self.calls.clear()
        self.should_succeed = True
        self.failure_reason = "Storage unavailable"
