"""SQLAlchemy declarative base for the Record Store tables."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Stable constraint names so the same schema builds on SQLite and PostgreSQL
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class AuditDatesMixin:
    """``created_date`` / ``updated_date`` maintained by the ORM.

    Project rows set their own dates in the workflow; this is for tables whose
    writes carry no business timestamps.
    """

    created_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
