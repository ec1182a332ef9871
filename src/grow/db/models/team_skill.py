"""Team skill configuration table."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from grow.db.base import AuditDatesMixin, Base


class TeamSkillRow(Base, AuditDatesMixin):
    __tablename__ = "team_skills"

    team_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    skills: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_by_user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    updated_by_user_id: Mapped[str] = mapped_column(String(128), nullable=False)
