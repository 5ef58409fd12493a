"""Pydantic schemas."""
from authcache.schemas.schemas import (
    CachedUser, ServerPolicy, DevicePermission, GroupPermission,
    CacheStatus,
    AccessCheck, AccessRequest, AccessResponse, AllowedIds
)

__all__ = [
    "CachedUser", "ServerPolicy", "DevicePermission", "GroupPermission",
    "CacheStatus",
    "AccessCheck", "AccessRequest", "AccessResponse", "AllowedIds"
]
