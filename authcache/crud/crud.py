"""Read-only database queries backing the authorization cache."""
from sqlalchemy.orm import Session
from authcache.models import User, Server, DevicePermission, GroupPermission


def get_server(db: Session):
    """Get the server policy row, or None if none is configured."""
    return db.query(Server).order_by(Server.id).first()


def get_users(db: Session):
    """Get every user."""
    return db.query(User).all()


def get_device_permissions(db: Session):
    """Get every user-to-device grant."""
    return db.query(DevicePermission).all()


def get_group_permissions(db: Session):
    """Get every user-to-group grant."""
    return db.query(GroupPermission).all()
