"""Project table (partitioned by owner, keyed by project id)."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from grow.db.base import Base


class ProjectRow(Base):
    __tablename__ = "projects"

    project_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    created_by_user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    created_by_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # ';'-joined lists, see grow.serialization
    required_skills: Mapped[str] = mapped_column(Text, nullable=False, default="")
    support_documents: Mapped[str] = mapped_column(Text, nullable=False, default="")
    project_participants_user_ids: Mapped[str] = mapped_column(Text, nullable=False, default="")
    project_participants_user_mapping: Mapped[str] = mapped_column(Text, nullable=False, default="")
    team_size: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    project_start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    project_end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    project_closed_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    etag: Mapped[str] = mapped_column(String(32), nullable=False)
