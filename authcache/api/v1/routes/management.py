"""Cache management endpoints (operator only)."""
from fastapi import APIRouter, Depends
from authcache import schemas
from authcache.api.deps import get_permissions_cache
from authcache.core.logging_config import logger
from authcache.core.security import verify_admin_key
from authcache.services.permissions import PermissionsCache

router = APIRouter()


@router.post("/cache/refresh", response_model=schemas.CacheStatus)
def refresh_cache_api(
    cache: PermissionsCache = Depends(get_permissions_cache),
    verified: bool = Depends(verify_admin_key)
):
    """Reloads the permissions snapshot from the database. Requires Admin API Key.

    Call after permissions change elsewhere in the system.
    """
    logger.info("Cache refresh requested")
    cache.refresh()
    return cache.status()


@router.get("/cache/status", response_model=schemas.CacheStatus)
def cache_status_api(
    cache: PermissionsCache = Depends(get_permissions_cache),
    verified: bool = Depends(verify_admin_key)
):
    """Reports what the cache currently holds. Requires Admin API Key."""
    return cache.status()
