"""SQLAlchemy database models."""
from sqlalchemy import Column, Integer, Boolean, ForeignKey
from authcache.core.database import Base


# Only the columns the authorization cache reads are mapped here.
class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    admin = Column(Boolean, nullable=False, default=False)


# Server-wide policy flags. A single row is expected; the first one wins.
class Server(Base):
    __tablename__ = "server"
    id = Column(Integer, primary_key=True, index=True)
    registration_enabled = Column(Boolean, nullable=False, default=True)
    readonly = Column(Boolean, nullable=False, default=False)


# Grants a user access to a device.
# user_id and device_id form a composite key, so a grant is never duplicated.
class DevicePermission(Base):
    __tablename__ = "device_permissions"
    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    device_id = Column(Integer, primary_key=True, index=True)


# Grants a user access to a device group.
class GroupPermission(Base):
    __tablename__ = "group_permissions"
    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    group_id = Column(Integer, primary_key=True, index=True)
