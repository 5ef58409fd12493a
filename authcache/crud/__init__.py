"""Database read operations."""
from authcache.crud.crud import (
    get_server,
    get_users,
    get_device_permissions,
    get_group_permissions
)

__all__ = [
    "get_server",
    "get_users",
    "get_device_permissions",
    "get_group_permissions"
]
