from fastapi import Header

from room_tracker.config.settings import get_import_credentials, get_settings
from room_tracker.utils.exceptions import ConfigurationError
from room_tracker.utils.logging import get_logger
from supabase import Client, ClientOptions, create_client

logger = get_logger(__name__)

# Global Supabase client
_supabase_client: Client | None = None


def get_supabase_client() -> Client:
    """Get Supabase client singleton"""
    global _supabase_client
    if _supabase_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise ConfigurationError("Supabase URL and anon key are required")

        _supabase_client = create_client(settings.supabase_url, settings.supabase_anon_key)
    return _supabase_client


def get_supabase_admin_client() -> Client:
    """Get Supabase admin client with service role key"""
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise ConfigurationError("Supabase URL and service role key are required")

    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def get_supabase_auth_client() -> Client:
    """Dedicated anon-key client for Supabase Auth calls.

    Signing in rewrites the Authorization header of the client that performed
    it, so auth calls never go through the shared anon singleton.
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise ConfigurationError("Supabase URL and anon key are required")

    options = ClientOptions(persist_session=False, auto_refresh_token=False)
    return create_client(settings.supabase_url, settings.supabase_anon_key, options=options)


def get_import_client() -> Client:
    """Client used by the checklist importer (service role, else anon)."""
    url, key = get_import_credentials()
    return create_client(url, key)


# ---------- Request-scoped client helpers (RLS hygiene) ----------


def get_supabase_client_for_token(token: str | None) -> Client:
    """Return a client whose PostgREST calls carry the caller's JWT.

    A fresh client is built per token. The anon singleton is only used for
    unauthenticated requests and never signs anyone in.
    """
    if not token:
        return get_supabase_client()
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise ConfigurationError("Supabase URL and anon key are required")
    client = create_client(settings.supabase_url, settings.supabase_anon_key)
    client.postgrest.auth(token)
    return client


def get_db_client_for_request(authorization: str | None = Header(None)) -> Client:
    """FastAPI dependency to provide a request-scoped Supabase client.

    - If Authorization: Bearer <token> is present, return a client authed with that token
    - Else return anon client
    """
    token: str | None = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    return get_supabase_client_for_token(token)
