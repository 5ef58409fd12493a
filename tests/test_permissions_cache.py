"""Unit tests for the permissions cache decision logic."""
import pytest
from authcache import schemas
from authcache.core.exceptions import AuthorizationError, AuthorizationReason
from authcache.services.permissions import PermissionsCache


class TestScenario:
    """Admin 1, user 2, device 100 granted to user 2."""

    def test_admin_flags(self, cache):
        assert cache.is_admin(1) == True
        assert cache.is_admin(2) == False

    def test_device_checks(self, cache):
        cache.check_device(2, 100)
        with pytest.raises(AuthorizationError):
            cache.check_device(2, 200)

    def test_admin_gets_no_implicit_device_access(self, cache):
        with pytest.raises(AuthorizationError) as exc_info:
            cache.check_device(1, 200)
        assert exc_info.value.reason == AuthorizationReason.DEVICE_DENIED

    def test_user_checks(self, cache):
        cache.check_user(1, 2)
        with pytest.raises(AuthorizationError):
            cache.check_user(2, 1)


class TestAdmin:
    """is_admin / check_admin."""

    @pytest.mark.parametrize("user_id", [0, 3, 999, -1])
    def test_unknown_user_is_not_admin(self, cache, user_id):
        """Unknown users are denied, not errors."""
        assert cache.is_admin(user_id) == False
        with pytest.raises(AuthorizationError) as exc_info:
            cache.check_admin(user_id)
        assert exc_info.value.reason == AuthorizationReason.ADMIN_REQUIRED
        assert str(exc_info.value) == "Admin access required"

    def test_admin_passes(self, cache):
        cache.check_admin(1)


class TestCheckUser:
    """Self access is always allowed; acting on others needs admin."""

    @pytest.mark.parametrize("user_id", [1, 2, 42])
    def test_self_access_always_allowed(self, cache, user_id):
        cache.check_user(user_id, user_id)

    @pytest.mark.parametrize("other_id", [1, 3, 999])
    def test_non_admin_cannot_act_on_others(self, cache, other_id):
        with pytest.raises(AuthorizationError) as exc_info:
            cache.check_user(2, other_id)
        assert exc_info.value.reason == AuthorizationReason.ADMIN_REQUIRED

    @pytest.mark.parametrize("other_id", [2, 3, 999])
    def test_admin_can_act_on_anyone(self, cache, other_id):
        cache.check_user(1, other_id)


class TestDeviceAndGroupPermissions:
    """Membership checks and the sets they are evaluated against."""

    def test_allowed_devices(self, cache):
        assert cache.allowed_devices(2) == {100}
        assert cache.allowed_devices(1) == frozenset()

    def test_check_device_matches_allowed_devices(self, fake_store):
        fake_store.grant_device(2, 101)
        cache = PermissionsCache(fake_store)
        for user_id in (1, 2, 3):
            allowed = cache.allowed_devices(user_id)
            for device_id in (100, 101, 102):
                if device_id in allowed:
                    cache.check_device(user_id, device_id)
                else:
                    with pytest.raises(AuthorizationError):
                        cache.check_device(user_id, device_id)

    def test_group_checks(self, fake_store):
        fake_store.grant_group(2, 7)
        cache = PermissionsCache(fake_store)
        assert cache.allowed_groups(2) == {7}
        cache.check_group(2, 7)
        with pytest.raises(AuthorizationError) as exc_info:
            cache.check_group(2, 8)
        assert exc_info.value.reason == AuthorizationReason.GROUP_DENIED

    def test_duplicate_grants_collapse(self, fake_store):
        fake_store.grant_device(2, 100)
        cache = PermissionsCache(fake_store)
        assert cache.allowed_devices(2) == {100}

    def test_returned_sets_are_immutable(self, cache):
        devices = cache.allowed_devices(2)
        with pytest.raises(AttributeError):
            devices.add(200)
        assert cache.allowed_devices(2) == {100}

    def test_lookup_of_unknown_user_does_not_grow_cache(self, cache):
        before = cache.status()
        assert cache.allowed_devices(12345) == frozenset()
        assert cache.allowed_groups(12345) == frozenset()
        with pytest.raises(AuthorizationError):
            cache.check_device(12345, 1)
        after = cache.status()
        assert after.device_permission_users == before.device_permission_users
        assert after.group_permission_users == before.group_permission_users


class TestPolicyGates:
    """Registration and readonly gating."""

    @pytest.mark.parametrize("registration_enabled", [True, False])
    @pytest.mark.parametrize("readonly", [True, False])
    def test_admin_always_passes(self, fake_store, registration_enabled, readonly):
        fake_store.server = schemas.ServerPolicy(
            registration_enabled=registration_enabled, readonly=readonly
        )
        cache = PermissionsCache(fake_store)
        cache.check_registration(1)
        cache.check_readonly(1)

    def test_registration_disabled_blocks_non_admin(self, fake_store):
        fake_store.server = schemas.ServerPolicy(registration_enabled=False, readonly=False)
        cache = PermissionsCache(fake_store)
        with pytest.raises(AuthorizationError) as exc_info:
            cache.check_registration(2)
        assert exc_info.value.reason == AuthorizationReason.REGISTRATION_DISABLED
        cache.check_readonly(2)

    def test_registration_enabled_allows_non_admin(self, cache):
        cache.check_registration(2)
        cache.check_registration(999)

    def test_readonly_blocks_non_admin(self, fake_store):
        fake_store.server = schemas.ServerPolicy(registration_enabled=True, readonly=True)
        cache = PermissionsCache(fake_store)
        with pytest.raises(AuthorizationError) as exc_info:
            cache.check_readonly(2)
        assert exc_info.value.reason == AuthorizationReason.READONLY
        assert str(exc_info.value) == "Readonly user"
        cache.check_registration(2)


class TestRefresh:
    """Snapshot replacement."""

    def test_refresh_is_idempotent(self, cache):
        first = (cache.status(), cache.allowed_devices(2), cache.is_admin(1))
        cache.refresh()
        cache.refresh()
        second = (cache.status(), cache.allowed_devices(2), cache.is_admin(1))
        assert first[0].user_count == second[0].user_count
        assert first[0].device_permission_users == second[0].device_permission_users
        assert first[1:] == second[1:]

    def test_device_grant_and_revoke_round_trip(self, fake_store, cache):
        fake_store.grant_device(2, 200)
        assert 200 not in cache.allowed_devices(2)
        cache.refresh()
        assert 200 in cache.allowed_devices(2)
        cache.check_device(2, 200)

        fake_store.revoke_device(2, 200)
        cache.refresh()
        assert 200 not in cache.allowed_devices(2)

    def test_group_revoke_leaves_no_stale_entry(self, fake_store, cache):
        fake_store.grant_group(2, 7)
        cache.refresh()
        assert cache.allowed_groups(2) == {7}

        fake_store.revoke_group(2, 7)
        cache.refresh()
        assert cache.allowed_groups(2) == frozenset()
        assert cache.status().group_permission_users == 0

    def test_removed_user_loses_admin(self, fake_store, cache):
        fake_store.users = [u for u in fake_store.users if u.id != 1]
        cache.refresh()
        assert cache.is_admin(1) == False

    def test_status_after_refresh(self, cache):
        status = cache.status()
        assert status.loaded == True
        assert status.refreshed_at is not None
        assert status.has_server_policy == True
        assert status.user_count == 2
        assert status.device_permission_users == 1
        assert status.group_permission_users == 0
