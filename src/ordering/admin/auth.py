"""Operator authentication against the identity provider."""

from dataclasses import dataclass

import structlog

from accounts import get_identity_provider
from accounts.port import Principal

logger = structlog.get_logger(__name__)

UNAUTHORIZED = "unauthorized"
FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AuthResult:
    ok: bool
    principal: Principal | None = None
    error: str | None = None
    reason: str | None = None  # unauthorized | forbidden


@dataclass(frozen=True)
class SessionResult:
    ok: bool
    access_token: str | None = None
    error: str | None = None


def bearer_token(header: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not header or not header.startswith("Bearer "):
        return None
    return header[len("Bearer ") :].strip() or None


def authenticate(token: str | None) -> AuthResult:
    if not token:
        return AuthResult(ok=False, error="Missing token.", reason=UNAUTHORIZED)

    try:
        principal = get_identity_provider().get_principal(token)
    except Exception as exc:
        logger.warning("Token verification failed", error=str(exc))
        principal = None

    if principal is None:
        return AuthResult(ok=False, error="Invalid token.", reason=UNAUTHORIZED)

    if not principal.is_admin:
        logger.warning("Admin access denied", user_id=principal.user_id)
        return AuthResult(ok=False, principal=principal, error="Admin access required.", reason=FORBIDDEN)

    return AuthResult(ok=True, principal=principal)


def sign_in(email: str, password: str) -> SessionResult:
    if not email or not password:
        return SessionResult(ok=False, error="Invalid admin credentials.")

    try:
        result = get_identity_provider().sign_in(email, password)
    except Exception as exc:
        logger.warning("Admin sign-in failed", email=email, error=str(exc))
        return SessionResult(ok=False, error="Invalid admin credentials.")

    if not result.success:
        logger.info("Admin sign-in rejected", email=email, reason=result.failure_reason)
        return SessionResult(ok=False, error="Invalid admin credentials.")

    return SessionResult(ok=True, access_token=result.access_token)


def sign_out(token: str | None) -> None:
    if not token:
        return
    try:
        get_identity_provider().sign_out(token)
    except Exception as exc:
        logger.warning("Admin sign-out failed", error=str(exc))
