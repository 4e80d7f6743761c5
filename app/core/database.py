from functools import lru_cache
from supabase import create_client, Client
from app.core.config import settings


@lru_cache
def get_supabase() -> Client:
    # Prefer Service Key so table/bucket access is not limited by RLS
    key_to_use = settings.SUPABASE_SERVICE_KEY if settings.SUPABASE_SERVICE_KEY else settings.SUPABASE_KEY
    return create_client(settings.SUPABASE_URL, key_to_use)


def get_db() -> Client:
    """
    Dependency to get the database client.
    """
    return get_supabase()
