"""Backing store interface and its SQLAlchemy implementation."""
from typing import Callable, List, Optional, Protocol, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from authcache import crud
from authcache import schemas
from authcache.core.exceptions import StorageReadError

T = TypeVar("T")


class BackingStore(Protocol):
    """Point-in-time reads the permissions cache is populated from."""

    def get_server(self) -> Optional[schemas.ServerPolicy]: ...

    def get_users(self) -> List[schemas.CachedUser]: ...

    def get_device_permissions(self) -> List[schemas.DevicePermission]: ...

    def get_group_permissions(self) -> List[schemas.GroupPermission]: ...


class DatabaseStore:
    """Reads cache contents from the database, one session per read.

    Rows are converted to immutable schema records while the session is open,
    so nothing handed to the cache is bound to a session.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def _read(self, query: Callable[[Session], T]) -> T:
        db = self._session_factory()
        try:
            return query(db)
        except SQLAlchemyError as e:
            raise StorageReadError(f"Backing store read failed: {e}") from e
        finally:
            db.close()

    def get_server(self) -> Optional[schemas.ServerPolicy]:
        def query(db: Session):
            server = crud.get_server(db)
            return schemas.ServerPolicy.model_validate(server) if server else None
        return self._read(query)

    def get_users(self) -> List[schemas.CachedUser]:
        return self._read(
            lambda db: [schemas.CachedUser.model_validate(u) for u in crud.get_users(db)]
        )

    def get_device_permissions(self) -> List[schemas.DevicePermission]:
        return self._read(
            lambda db: [
                schemas.DevicePermission.model_validate(p)
                for p in crud.get_device_permissions(db)
            ]
        )

    def get_group_permissions(self) -> List[schemas.GroupPermission]:
        return self._read(
            lambda db: [
                schemas.GroupPermission.model_validate(p)
                for p in crud.get_group_permissions(db)
            ]
        )
