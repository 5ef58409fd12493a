"""SQLAlchemy models."""
from authcache.models.models import User, Server, DevicePermission, GroupPermission
from authcache.core.database import Base

__all__ = ["User", "Server", "DevicePermission", "GroupPermission", "Base"]
