from supabase import create_client, Client
from app.config import settings
from app.core.exceptions import BackendUnavailable


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
        """Client with service_role key; bypasses RLS. Needed for auth admin calls and table writes."""
        if cls._service_client is None:
            if not settings.supabase_service_role_key:
                raise BackendUnavailable(
                    "Service role key not configured. Set SUPABASE_SERVICE_ROLE_KEY."
                )
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()
