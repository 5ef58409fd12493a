"""Error types raised by the authorization cache and its backing store."""
from enum import Enum
from typing import Optional


class AuthorizationReason(str, Enum):
    """Identifies which gate denied access."""
    ADMIN_REQUIRED = "admin_required"
    DEVICE_DENIED = "device_denied"
    GROUP_DENIED = "group_denied"
    REGISTRATION_DISABLED = "registration_disabled"
    READONLY = "readonly"


_MESSAGES = {
    AuthorizationReason.ADMIN_REQUIRED: "Admin access required",
    AuthorizationReason.DEVICE_DENIED: "Device access denied",
    AuthorizationReason.GROUP_DENIED: "Group access denied",
    AuthorizationReason.REGISTRATION_DISABLED: "Registration disabled",
    AuthorizationReason.READONLY: "Readonly user",
}


class AccessCacheError(Exception):
    """Base class for errors raised by this package."""


class StorageReadError(AccessCacheError):
    """A backing store read failed."""


class AuthorizationError(AccessCacheError):
    """Raised by the check_* gates when the requested access is not permitted."""

    def __init__(self, reason: AuthorizationReason, message: Optional[str] = None):
        self.reason = reason
        super().__init__(message or _MESSAGES[reason])
