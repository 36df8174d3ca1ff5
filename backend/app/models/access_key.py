import uuid
from datetime import datetime

from sqlalchemy import CHAR, Column, DateTime, String
from sqlalchemy.types import TypeDecorator

from ..database import Base


class GUID(TypeDecorator):
    """Platform-independent UUID type.

    Uses CHAR(36) to store UUIDs as strings, compatible with all backends
    including SQLite.
    """

    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return uuid.UUID(value)
        return value


class AccessKey(Base):
    """An invite code provisioned out-of-band. Read-only for the API."""

    __tablename__ = "keys"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    code = Column(String(255), nullable=False, index=True)  # not unique-constrained; first match wins
    label = Column(String(255), nullable=True)  # admin note, e.g. who the key was issued to
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
