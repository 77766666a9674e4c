"""SMTP email adapter: sends order mail through the configured sender account."""

import smtplib
from email.message import EmailMessage
from email.utils import formataddr, make_msgid

import structlog

from notifications.channel.email_port import EmailPort
from shared.settings import smtp_settings

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    """Implicit TLS when ``secure`` is set (port 465), STARTTLS otherwise."""

    def __init__(self, settings: dict | None = None, timeout: float = 30.0):
        self.settings = settings or smtp_settings()
        self.timeout = timeout

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        sender_email = self.settings.get("sender_email")
        sender_password = self.settings.get("sender_password")
        if not sender_email or not sender_password:
            return self.undelivered("Missing SMTP sender credentials.")

        message = EmailMessage()
        message["From"] = formataddr((self.settings.get("sender_name") or "", sender_email))
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain=sender_email.split("@")[-1])
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")

        host, port = self.settings["host"], self.settings["port"]
        try:
            if self.settings.get("secure", True):
                with smtplib.SMTP_SSL(host, port, timeout=self.timeout) as smtp:
                    smtp.login(sender_email, sender_password)
                    smtp.send_message(message)
            else:
                with smtplib.SMTP(host, port, timeout=self.timeout) as smtp:
                    smtp.starttls()
                    smtp.login(sender_email, sender_password)
                    smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery failed", host=host, port=port, to=to, error=str(exc))
            return self.undelivered(str(exc))

        return self.delivered(message["Message-ID"])
