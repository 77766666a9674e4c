"""In-memory outbox for development and tests."""

from itertools import count

from notifications.channel.email_port import EmailPort

DEFAULT_FAILURE = "Email delivery failed"


class FakeEmailAdapter(EmailPort):
    """Keeps every accepted message in ``sent_emails``; can be told to refuse delivery."""

    def __init__(self):
        self._sequence = count(1)
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.failure_reason = DEFAULT_FAILURE

    def configure(self, should_succeed: bool = True, failure_reason: str = DEFAULT_FAILURE):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> dict:
        if not self.should_succeed:
            return self.undelivered(self.failure_reason)

        message_id = f"<outbox-{next(self._sequence)}@adph-merch.local>"
        self.sent_emails.append(
            dict(message_id=message_id, to=to, subject=subject, body=body, html_body=html_body)
        )
        return self.delivered(message_id)

    def messages_to(self, address: str) -> list[dict]:
        return [mail for mail in self.sent_emails if mail["to"] == address]

    def reset(self):
        self._sequence = count(1)
        self.sent_emails.clear()
        self.should_succeed = True
        self.failure_reason = DEFAULT_FAILURE
