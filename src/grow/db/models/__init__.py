"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from grow.db.models.project import ProjectRow
from grow.db.models.acquired_skill import AcquiredSkillRow
from grow.db.models.team_skill import TeamSkillRow

__all__ = ["ProjectRow", "AcquiredSkillRow", "TeamSkillRow"]
