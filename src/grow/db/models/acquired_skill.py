"""Acquired skills table, one row per (participant, project)."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from grow.db.base import Base


class AcquiredSkillRow(Base):
    __tablename__ = "acquired_skills"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    project_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    acquired_skills: Mapped[str] = mapped_column(Text, nullable=False)
    feedback: Mapped[str] = mapped_column(String(250), nullable=False, default="")
    project_title: Mapped[str] = mapped_column(String(100), nullable=False)
    project_owner_name: Mapped[str] = mapped_column(String(200), nullable=False)
    project_closed_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
