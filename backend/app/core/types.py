"""Column types shared by the portal models"""
import enum
import uuid
from typing import Type

from sqlalchemy import TypeDecorator, String, Enum as SQLEnum


def generate_uuid():
    """Generate a UUID string"""
    return str(uuid.uuid4())


class GUID(TypeDecorator):
    """Platform-independent GUID type that stores UUIDs as VARCHAR(36)"""
    impl = String(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return str(value)
        return value


def enum_column(enum_cls: Type[enum.Enum], name: str) -> SQLEnum:
    """
    Enum type persisted by member value ("in_progress", not "IN_PROGRESS").

    Stored as a constrained VARCHAR rather than a native database enum so
    SQLite and PostgreSQL hold identical values.
    """
    return SQLEnum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=32,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )
