"""Environment-driven settings.

Values are read on every call so tests can override them with
``monkeypatch.setenv`` without reloading modules.
"""

import os

RECEIPT_BUCKET_DEFAULT = "gcash-receipts"
MAX_RECEIPT_SIZE = 5 * 1024 * 1024


def env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").strip().lower() == "true"


def is_production() -> bool:
    return os.getenv("PROTEAN_ENV") == "production"


def adapter_mode() -> str:
    """Which collaborator adapters to wire: ``fake`` (default) or ``supabase``."""
    return os.getenv("MERCH_ADAPTERS", "fake").strip().lower()


def receipt_bucket() -> str:
    return os.getenv("MERCH_RECEIPT_BUCKET", RECEIPT_BUCKET_DEFAULT)


def status_set_name() -> str:
    return os.getenv("MERCH_STATUS_SET", "full").strip().lower()


def supabase_credentials() -> tuple[str, str]:
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY")
    if not url or not key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set when MERCH_ADAPTERS=supabase")
    return url, key


def email_channel() -> str:
    """``fake`` (default) records messages in memory, ``smtp`` sends them."""
    return os.getenv("MERCH_EMAIL_CHANNEL", "fake").strip().lower()


def smtp_settings() -> dict:
    return {
        "host": os.getenv("ARDUINODAYPH_SMTP_HOST", "smtp.gmail.com"),
        "port": int(os.getenv("ARDUINODAYPH_SMTP_PORT", "465")),
        "secure": env_flag("ARDUINODAYPH_SMTP_SECURE", True),
        "sender_email": os.getenv("ARDUINODAYPH_SENDER_EMAIL"),
        "sender_password": os.getenv("ARDUINODAYPH_SENDER_PASSWORD"),
        "sender_name": os.getenv("ARDUINODAYPH_SENDER_NAME", "Arduino Day Philippines"),
    }


def delivery_fee() -> float:
    """Flat fee added to delivery orders (``MERCH_DELIVERY_FEE``, default 0)."""
    return float(os.getenv("MERCH_DELIVERY_FEE", "0") or 0)
