"""Identity provider port (abstract interface).

Operators authenticate against a managed identity service. The service hands
out bearer tokens and resolves a token back to a ``Principal`` whose claims
carry the role.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Principal:
    """A verified user as reported by the identity provider."""

    user_id: str
    email: str | None = None
    app_metadata: dict = field(default_factory=dict)
    user_metadata: dict = field(default_factory=dict)

    @property
    def role(self) -> str | None:
        role = (self.app_metadata or {}).get("role")
        if role is None:
            role = (self.user_metadata or {}).get("role")
        return role

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


@dataclass(frozen=True)
class SignInResult:
    success: bool
    access_token: str | None = None
    failure_reason: str | None = None


class IdentityProvider(ABC):
    @abstractmethod
    def sign_in(self, email: str, password: str) -> SignInResult:
        """Exchange credentials for a session token."""
        ...

    @abstractmethod
    def get_principal(self, token: str) -> Principal | None:
        """Resolve a token; ``None`` when the token is not valid."""
        ...

    @abstractmethod
    def sign_out(self, token: str) -> None: ...
