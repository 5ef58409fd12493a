"""In-memory authorization cache.

Mirrors users, server policy flags and device/group grants from a backing
store and answers authorization checks against that snapshot. Queries never
touch the store; only ``refresh()`` does.

Each mapping is built off-lock from a store read and then swapped in whole.
Installed mappings and the frozensets inside them are never mutated, so a
query only needs the lock long enough to pick up a reference.
"""
import threading
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Iterable, Optional, Tuple
from authcache import schemas
from authcache.core.exceptions import (
    AuthorizationError,
    AuthorizationReason,
    StorageReadError,
)
from authcache.core.logging_config import logger
from authcache.services.store import BackingStore

_EMPTY: FrozenSet[int] = frozenset()


def _group_by_user(pairs: Iterable[Tuple[int, int]]) -> Dict[int, FrozenSet[int]]:
    grouped = defaultdict(set)
    for user_id, target_id in pairs:
        grouped[user_id].add(target_id)
    return {user_id: frozenset(ids) for user_id, ids in grouped.items()}


class PermissionsCache:
    """Authorization snapshot with a single refresh operation."""

    def __init__(self, store: BackingStore):
        self._store = store
        self._lock = threading.Lock()
        self._refresh_lock = threading.Lock()

        self._server: Optional[schemas.ServerPolicy] = None
        self._users: Dict[int, schemas.CachedUser] = {}
        self._device_permissions: Dict[int, FrozenSet[int]] = {}
        self._group_permissions: Dict[int, FrozenSet[int]] = {}
        self._refreshed_at: Optional[datetime] = None

        self.refresh()

    def refresh(self) -> None:
        """Reload the snapshot from the backing store.

        A storage failure is logged and stops the refresh; pieces already
        swapped in stay, the rest keep their previous contents.
        """
        with self._refresh_lock:
            try:
                server = self._store.get_server()
                with self._lock:
                    self._server = server

                users = {user.id: user for user in self._store.get_users()}
                with self._lock:
                    self._users = users

                devices = _group_by_user(
                    (p.user_id, p.device_id) for p in self._store.get_device_permissions()
                )
                with self._lock:
                    self._device_permissions = devices

                groups = _group_by_user(
                    (p.user_id, p.group_id) for p in self._store.get_group_permissions()
                )
                with self._lock:
                    self._group_permissions = groups
                    self._refreshed_at = datetime.now(timezone.utc)
            except StorageReadError as e:
                logger.warning(f"Permissions refresh failed, keeping partial snapshot: {e}")
                return

        logger.info(
            f"Permissions refreshed: users={len(users)}, "
            f"device_grantees={len(devices)}, group_grantees={len(groups)}, "
            f"server_policy={'loaded' if server else 'missing'}"
        )

    def is_admin(self, user_id: int) -> bool:
        with self._lock:
            user = self._users.get(user_id)
        return user is not None and user.admin

    def check_admin(self, user_id: int) -> None:
        if not self.is_admin(user_id):
            raise AuthorizationError(AuthorizationReason.ADMIN_REQUIRED)

    def check_user(self, user_id: int, other_user_id: int) -> None:
        """Acting on another user's behalf requires admin rights."""
        if user_id != other_user_id:
            self.check_admin(user_id)

    def allowed_groups(self, user_id: int) -> FrozenSet[int]:
        with self._lock:
            return self._group_permissions.get(user_id, _EMPTY)

    def allowed_devices(self, user_id: int) -> FrozenSet[int]:
        with self._lock:
            return self._device_permissions.get(user_id, _EMPTY)

    def check_device(self, user_id: int, device_id: int) -> None:
        # Admins get no implicit device access
        if device_id not in self.allowed_devices(user_id):
            raise AuthorizationError(AuthorizationReason.DEVICE_DENIED)

    def check_group(self, user_id: int, group_id: int) -> None:
        if group_id not in self.allowed_groups(user_id):
            raise AuthorizationError(AuthorizationReason.GROUP_DENIED)

    def _server_policy(self) -> Optional[schemas.ServerPolicy]:
        with self._lock:
            return self._server

    def check_registration(self, user_id: int) -> None:
        """Non-admins may register only while registration is enabled.

        With no server policy loaded, registration counts as disabled.
        """
        server = self._server_policy()
        registration_enabled = server is not None and server.registration_enabled
        if not registration_enabled and not self.is_admin(user_id):
            raise AuthorizationError(AuthorizationReason.REGISTRATION_DISABLED)

    def check_readonly(self, user_id: int) -> None:
        """Non-admins may not mutate while the server is readonly.

        With no server policy loaded, the server counts as readonly.
        """
        server = self._server_policy()
        readonly = server is None or server.readonly
        if readonly and not self.is_admin(user_id):
            raise AuthorizationError(AuthorizationReason.READONLY)

    def status(self) -> schemas.CacheStatus:
        with self._lock:
            return schemas.CacheStatus(
                loaded=self._refreshed_at is not None,
                refreshed_at=self._refreshed_at,
                has_server_policy=self._server is not None,
                user_count=len(self._users),
                device_permission_users=len(self._device_permissions),
                group_permission_users=len(self._group_permissions),
            )
