"""Supabase Auth adapter."""

import structlog

from accounts.port import IdentityProvider, Principal, SignInResult
from shared.supabase import get_client

logger = structlog.get_logger(__name__)


class SupabaseIdentityProvider(IdentityProvider):
    def sign_in(self, email: str, password: str) -> SignInResult:
        try:
            response = get_client().auth.sign_in_with_password({"email": email, "password": password})
        except Exception as exc:
            logger.info("Sign-in rejected", email=email, error=str(exc))
            return SignInResult(success=False, failure_reason=str(exc))

        if response.session is None:
            return SignInResult(success=False, failure_reason="No session returned")
        return SignInResult(success=True, access_token=response.session.access_token)

    def get_principal(self, token: str) -> Principal | None:
        try:
            response = get_client().auth.get_user(token)
        except Exception as exc:
            logger.info("Token rejected", error=str(exc))
            return None

        user = response.user if response else None
        if user is None:
            return None
        return Principal(
            user_id=str(user.id),
            email=user.email,
            app_metadata=dict(user.app_metadata or {}),
            user_metadata=dict(user.user_metadata or {}),
        )

    def sign_out(self, token: str) -> None:
        get_client().auth.admin.sign_out(token)
