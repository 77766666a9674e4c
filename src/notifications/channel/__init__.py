"""Email channel registry.

Provides a process-wide email adapter. The fake adapter is used by default;
``MERCH_EMAIL_CHANNEL=smtp`` switches to the SMTP adapter.
"""

from notifications.channel.email_port import EmailPort
from shared.settings import email_channel

_email_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    global _email_channel
    if _email_channel is None:
        channel = email_channel()
        if channel == "smtp":
            from notifications.channel.smtp_email import SmtpEmailAdapter

            _email_channel = SmtpEmailAdapter()
        elif channel == "fake":
            from notifications.channel.fake_email import FakeEmailAdapter

            _email_channel = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown email channel: {channel}")
    return _email_channel


def set_email_channel(adapter: EmailPort) -> None:
    global _email_channel
    _email_channel = adapter


def reset_channels():
    """Reset the channel singleton (useful for testing)."""
    global _email_channel
    _email_channel = None
