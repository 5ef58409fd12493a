"""API dependencies."""
from fastapi import Header
from authcache.services.cache import get_permissions_cache


def get_current_user_id(x_user_id: int = Header(...)) -> int:
    """The acting user, as identified by the upstream authentication layer."""
    return x_user_id


__all__ = ["get_permissions_cache", "get_current_user_id"]
