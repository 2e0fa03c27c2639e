"""
Dependency injection for shared clients and resources
The storage backend is chosen once, at process start, from STORAGE_BACKEND.
"""
import logging
from functools import lru_cache
from typing import Optional

from supabase import create_client, Client

from mycore.core.config import settings
from mycore.core.exceptions import NotConfiguredError

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("memory", "json", "supabase")


@lru_cache(maxsize=None)
def get_supabase_client() -> Client:
    """
    Get Supabase client instance

    Raises:
        NotConfiguredError: If SUPABASE_URL or SUPABASE_KEY is missing
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise NotConfiguredError("Supabase not configured: set SUPABASE_URL and SUPABASE_KEY")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


def build_storage(backend: Optional[str] = None):
    """Construct the storage backend named by STORAGE_BACKEND"""
    from mycore.services.storage import JsonFileStorage, MemoryStorage, SupabaseStorage

    backend = backend or settings.STORAGE_BACKEND
    if backend == "memory":
        return MemoryStorage()
    if backend == "json":
        return JsonFileStorage(settings.JSON_STORAGE_PATH)
    if backend == "supabase":
        return SupabaseStorage(get_supabase_client())
    raise NotConfiguredError(f"Unknown STORAGE_BACKEND '{backend}', expected one of {STORAGE_BACKENDS}")


@lru_cache(maxsize=None)
def get_store():
    """Process-wide store (one logical session per client process)"""
    from mycore.services.store import HabitStore

    storage = build_storage()
    logger.info(f"Using {type(storage).__name__} storage")
    return HabitStore(storage)


@lru_cache(maxsize=None)
def get_auth_service():
    from mycore.services.auth import LocalAuthService, SupabaseAuthService

    if settings.STORAGE_BACKEND == "supabase":
        return SupabaseAuthService(get_supabase_client())
    return LocalAuthService(get_store().storage)


@lru_cache(maxsize=None)
def get_notification_service():
    from mycore.services.external.whatsapp import is_twilio_configured, send_notification_message
    from mycore.services.notifications import NotificationService

    if is_twilio_configured():
        return NotificationService(send_notification_message)
    logger.warning("Twilio credentials not found. Notifications will only be logged.")
    return NotificationService()
