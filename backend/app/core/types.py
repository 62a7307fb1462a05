"""Column helpers for the string UUID keys every table uses"""
import uuid

from sqlalchemy import Column, ForeignKey, String, TypeDecorator


def new_id() -> str:
    return str(uuid.uuid4())


class UUIDString(TypeDecorator):
    """
    UUIDs stored as canonical 36-character strings on PostgreSQL and SQLite
    alike. uuid.UUID values are accepted on bind; rows always come back as
    str, the form tokens and JSON responses carry.
    """
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if isinstance(value, uuid.UUID):
            return str(value)
        return value


def id_column() -> Column:
    """Primary key filled with a fresh UUID on insert"""
    return Column(UUIDString, primary_key=True, default=new_id)


def user_ref_column(**kwargs) -> Column:
    """Non-null reference to users.id"""
    return Column(UUIDString, ForeignKey("users.id"), nullable=False, **kwargs)
