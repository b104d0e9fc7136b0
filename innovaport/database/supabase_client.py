from supabase import create_client, Client
from innovaport.config import settings
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Used for public inserts and webhooks."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_supabase_admin() -> Client:
    return SupabaseClient.get_service_client()


def get_supabase_session() -> Client:
    """Fresh anon client for sign-up/sign-in; the session it stores dies with the request"""
    return create_client(settings.supabase_url, settings.supabase_key)


def first_row(result) -> Optional[Dict[str, Any]]:
    """First row of an executed query, or None"""
    if result is None or not result.data:
        return None
    return result.data[0]


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
