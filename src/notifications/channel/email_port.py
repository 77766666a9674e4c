"""Outbound mail port used for order status notifications."""

from abc import ABC, abstractmethod

SENT = "sent"
FAILED = "failed"


class EmailPort(ABC):
    """Delivers one rendered order e-mail.

    ``send`` answers with ``{"message_id", "status", "error"}`` where ``status``
    is ``SENT`` or ``FAILED``. Delivery problems are reported there, not raised.
    """

    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> dict: ...

    @staticmethod
    def delivered(message_id: str) -> dict:
        return {"message_id": message_id, "status": SENT}

    @staticmethod
    def undelivered(error: str) -> dict:
        return {"message_id": None, "status": FAILED, "error": error}
