"""Pydantic schemas for cached records and request/response validation."""
from pydantic import BaseModel
from typing import List, Optional, Literal
from datetime import datetime
from authcache.core.exceptions import AuthorizationReason


# --- Cached Records (immutable copies of backing store rows) ---
class CachedUser(BaseModel):
    id: int
    admin: bool = False

    class Config:
        from_attributes = True
        frozen = True


class ServerPolicy(BaseModel):
    registration_enabled: bool
    readonly: bool

    class Config:
        from_attributes = True
        frozen = True


class DevicePermission(BaseModel):
    user_id: int
    device_id: int

    class Config:
        from_attributes = True
        frozen = True


class GroupPermission(BaseModel):
    user_id: int
    group_id: int

    class Config:
        from_attributes = True
        frozen = True


# --- Cache Status ---
class CacheStatus(BaseModel):
    loaded: bool
    refreshed_at: Optional[datetime] = None
    has_server_policy: bool
    user_count: int
    device_permission_users: int
    group_permission_users: int


# --- Access Decision Schemas ---
AccessCheck = Literal["admin", "user", "device", "group", "registration", "readonly"]


class AccessRequest(BaseModel):
    user_id: int
    check: AccessCheck
    target_id: Optional[int] = None  # other user, device or group id


class AccessResponse(BaseModel):
    decision: bool
    reason: str
    code: Optional[AuthorizationReason] = None


class AllowedIds(BaseModel):
    user_id: int
    ids: List[int]
