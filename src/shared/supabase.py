"""Lazily created Supabase client shared by the identity and storage adapters."""

from supabase import Client, create_client

from shared.settings import supabase_credentials

_client: Client | None = None


def get_client() -> Client:
    global _client
    if _client is None:
        url, key = supabase_credentials()
        _client = create_client(url, key)
    return _client
