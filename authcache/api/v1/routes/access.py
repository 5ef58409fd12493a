"""Access decision and permission lookup endpoints."""
from typing import List
from fastapi import APIRouter, Depends
from authcache import schemas
from authcache.api.deps import get_permissions_cache, get_current_user_id
from authcache.services.authorization import evaluate_access
from authcache.services.permissions import PermissionsCache

router = APIRouter()


@router.post("/access", response_model=schemas.AccessResponse)
def authorize(
    request: schemas.AccessRequest,
    cache: PermissionsCache = Depends(get_permissions_cache)
):
    """Evaluates a single access check against the cached snapshot."""
    return evaluate_access(request, cache)


@router.post("/access/batch", response_model=List[schemas.AccessResponse])
def authorize_batch(
    requests: List[schemas.AccessRequest],
    cache: PermissionsCache = Depends(get_permissions_cache)
):
    """Evaluates several access checks against the same cache."""
    return [evaluate_access(req, cache) for req in requests]


@router.get("/users/{user_id}/devices", response_model=schemas.AllowedIds)
def list_allowed_devices(
    user_id: int,
    caller_id: int = Depends(get_current_user_id),
    cache: PermissionsCache = Depends(get_permissions_cache)
):
    """Devices the user may access. Callers other than the user must be admins."""
    cache.check_user(caller_id, user_id)
    return schemas.AllowedIds(user_id=user_id, ids=sorted(cache.allowed_devices(user_id)))


@router.get("/users/{user_id}/groups", response_model=schemas.AllowedIds)
def list_allowed_groups(
    user_id: int,
    caller_id: int = Depends(get_current_user_id),
    cache: PermissionsCache = Depends(get_permissions_cache)
):
    """Groups the user may access. Callers other than the user must be admins."""
    cache.check_user(caller_id, user_id)
    return schemas.AllowedIds(user_id=user_id, ids=sorted(cache.allowed_groups(user_id)))
