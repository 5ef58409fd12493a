"""Process-wide permissions cache instance."""
from functools import lru_cache
from authcache.core.database import SessionLocal
from authcache.services.permissions import PermissionsCache
from authcache.services.store import DatabaseStore


# Built on first use, not at import, so the tables can be created first.
# Also used as a FastAPI dependency; tests override it.
@lru_cache
def get_permissions_cache() -> PermissionsCache:
    return PermissionsCache(DatabaseStore(SessionLocal))
