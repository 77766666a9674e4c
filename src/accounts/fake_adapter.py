"""In-memory identity provider for development and testing."""

import secrets
from uuid import uuid4

from accounts.port import IdentityProvider, Principal, SignInResult


class FakeIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self.users: dict[str, dict] = {}
        self.sessions: dict[str, Principal] = {}

    def register_user(
        self,
        email: str,
        password: str,
        role: str | None = None,
        user_metadata: dict | None = None,
    ) -> Principal:
        principal = Principal(
            user_id=str(uuid4()),
            email=email,
            app_metadata={"role": role} if role else {},
            user_metadata=dict(user_metadata or {}),
        )
        self.users[email.lower()] = {"password": password, "principal": principal}
        return principal

    def issue_token(self, principal: Principal) -> str:
        token = secrets.token_urlsafe(24)
        self.sessions[token] = principal
        return token

    def sign_in(self, email: str, password: str) -> SignInResult:
        user = self.users.get((email or "").lower())
        if user is None or user["password"] != password:
            return SignInResult(success=False, failure_reason="Invalid login credentials")
        return SignInResult(success=True, access_token=self.issue_token(user["principal"]))

    def get_principal(self, token: str) -> Principal | None:
        return self.sessions.get(token)

    def sign_out(self, token: str) -> None:
        self.sessions.pop(token, None)

    def reset(self) -> None:
        self.users.clear()
        self.sessions.clear()
