"""Access decision evaluation on top of the permissions cache."""
from typing import Callable, Dict
from authcache import schemas
from authcache.core.exceptions import AuthorizationError
from authcache.core.logging_config import logger
from authcache.services.permissions import PermissionsCache

# Checks whose gate takes a second id
_TARGETED: Dict[str, Callable[[PermissionsCache, int, int], None]] = {
    "user": PermissionsCache.check_user,
    "device": PermissionsCache.check_device,
    "group": PermissionsCache.check_group,
}

_UNTARGETED: Dict[str, Callable[[PermissionsCache, int], None]] = {
    "admin": PermissionsCache.check_admin,
    "registration": PermissionsCache.check_registration,
    "readonly": PermissionsCache.check_readonly,
}


def evaluate_access(request: schemas.AccessRequest, cache: PermissionsCache) -> schemas.AccessResponse:
    """Runs the requested gate and reports the outcome instead of raising."""
    try:
        if request.check in _TARGETED:
            if request.target_id is None:
                logger.info(f"Access denied: check={request.check} user={request.user_id} (no target)")
                return schemas.AccessResponse(
                    decision=False,
                    reason=f"Check '{request.check}' requires target_id."
                )
            _TARGETED[request.check](cache, request.user_id, request.target_id)
        else:
            _UNTARGETED[request.check](cache, request.user_id)
    except AuthorizationError as e:
        logger.info(
            f"Access denied: check={request.check} user={request.user_id} "
            f"target={request.target_id} reason={e.reason.value}"
        )
        return schemas.AccessResponse(decision=False, reason=str(e), code=e.reason)

    logger.info(f"Access granted: check={request.check} user={request.user_id} target={request.target_id}")
    return schemas.AccessResponse(decision=True, reason="Access granted.")
