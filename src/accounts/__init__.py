"""Identity provider factory.

- FakeIdentityProvider for development and testing (default)
- SupabaseIdentityProvider when MERCH_ADAPTERS=supabase
"""

from accounts.fake_adapter import FakeIdentityProvider
from accounts.port import IdentityProvider
from shared.settings import adapter_mode

_current_provider: IdentityProvider | None = None


def get_identity_provider() -> IdentityProvider:
    global _current_provider
    if _current_provider is None:
        if adapter_mode() == "supabase":
            from accounts.supabase_adapter import SupabaseIdentityProvider

            _current_provider = SupabaseIdentityProvider()
        else:
            _current_provider = FakeIdentityProvider()
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    global _current_provider
    _current_provider = None
