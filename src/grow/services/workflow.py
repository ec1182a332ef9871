"""Project lifecycle: create, edit, join, leave, close and soft-delete.

Every operation reads the project under ``(owner_id, project_id)``, checks its
guards against the current record and writes it back with an etag-conditional
replace. Join and Leave re-read and retry when a concurrent writer wins the
race, so capacity and duplicate checks always run against the latest record.

Each successful write asks the search indexer to refresh; a failed refresh is
logged by the indexer and never fails the write.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from grow.config import settings
from grow.errors.exceptions import (
    ConcurrencyConflict,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from grow.models.enums import ProjectStatus
from grow.models.project import (
    CloseProjectRequest,
    Participant,
    Project,
    ProjectCreate,
    ProjectUpdate,
)
from grow.models.skills import AcquiredSkill
from grow.repositories.acquired_skill_repo import AcquiredSkillRepository
from grow.repositories.project_repo import ProjectRepository, project_from_row
from grow.search.indexer import SearchIndexer
from grow.serialization import clean_display_name
from grow.services.id_generator import generate_project_id

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def _refresh_index(indexer: SearchIndexer | None) -> None:
    if indexer is not None:
        await indexer.run_on_demand()


async def _load(repo: ProjectRepository, owner_id: str, project_id: str) -> tuple[Project, str]:
    """Return the live project and its etag; removed projects count as missing."""
    row = await repo.get(owner_id, project_id)
    if row is None or row.is_removed:
        raise NotFoundError("Project", project_id)
    return project_from_row(row), row.etag


def _reject(project: Project, code: str, message: str, **details) -> ConflictError:
    logger.warning("Project %s: %s (%s)", project.project_id, message, code)
    return ConflictError(message, code=code, details={"project_id": project.project_id, **details})


def _concurrent_update(project_id: str) -> ConflictError:
    return ConflictError(
        "Project was modified concurrently, please retry",
        code="CONCURRENT_UPDATE",
        details={"project_id": project_id},
    )


def _ensure_not_closed(project: Project) -> None:
    if project.status == ProjectStatus.CLOSED:
        raise _reject(project, "PROJECT_CLOSED", "Project is closed")


async def _update_with_retry(
    session: AsyncSession,
    owner_id: str,
    project_id: str,
    mutate: Callable[[Project], None],
    retry_attempts: int | None = None,
) -> Project:
    """Read, mutate and conditionally replace, re-reading on a lost race.

    ``mutate`` checks its guards against the freshly read project and raises
    to abort; it is re-run from scratch on every attempt.
    """
    if retry_attempts is None:
        retry_attempts = settings.concurrency_retry_attempts
    repo = ProjectRepository(session)

    for attempt in range(retry_attempts + 1):
        project, etag = await _load(repo, owner_id, project_id)
        mutate(project)
        try:
            await repo.replace(project, etag)
        except ConcurrencyConflict:
            logger.warning(
                "Concurrent update on project %s (attempt %d of %d)",
                project_id,
                attempt + 1,
                retry_attempts + 1,
            )
            continue
        await session.commit()
        return project

    raise _concurrent_update(project_id)


async def get_project(session: AsyncSession, owner_id: str, project_id: str) -> Project:
    project, _ = await _load(ProjectRepository(session), owner_id, project_id)
    return project


async def create_project(
    session: AsyncSession,
    body: ProjectCreate,
    owner_id: str,
    owner_name: str,
    indexer: SearchIndexer | None = None,
) -> Project:
    """Create a project in NotStarted state owned by the caller."""
    now = _now()
    if body.project_end_date < now:
        raise ValidationError(
            "Project end date must not be in the past",
            {"project_end_date": body.project_end_date.isoformat()},
        )

    repo = ProjectRepository(session)
    if await repo.title_in_use(body.title):
        raise ConflictError(
            f"A project titled '{body.title}' already exists",
            code="TITLE_IN_USE",
            details={"title": body.title},
        )

    project = Project(
        project_id=generate_project_id(),
        created_by_user_id=owner_id,
        created_by_name=owner_name,
        status=ProjectStatus.NOT_STARTED,
        created_date=now,
        updated_date=now,
        **body.model_dump(),
    )
    await repo.upsert(project)
    await session.commit()
    logger.info("Project %s created by %s", project.project_id, owner_id)

    await _refresh_index(indexer)
    return project


async def edit_project(
    session: AsyncSession,
    owner_id: str,
    project_id: str,
    body: ProjectUpdate,
    indexer: SearchIndexer | None = None,
) -> Project:
    """Replace the mutable fields of a non-closed project owned by the caller."""
    repo = ProjectRepository(session)
    project, etag = await _load(repo, owner_id, project_id)
    _ensure_not_closed(project)

    if body.title.lower() != project.title.lower() and await repo.title_in_use(
        body.title, exclude_project_id=project_id
    ):
        raise ConflictError(
            f"A project titled '{body.title}' already exists",
            code="TITLE_IN_USE",
            details={"title": body.title},
        )

    participants = project.participants
    if body.participant_ids is not None:
        unknown = set(body.participant_ids) - set(project.participant_ids)
        if unknown:
            raise ValidationError(
                "Only current participants can be kept",
                {"unknown_participants": sorted(unknown)},
            )
        participants = [p for p in participants if p.user_id in body.participant_ids]

    if body.team_size < len(participants):
        raise ValidationError(
            "Team size cannot be smaller than the number of participants",
            {"team_size": body.team_size, "participants": len(participants)},
        )

    fields = body.model_dump(exclude={"participant_ids", "status"})
    fields["status"] = body.status or project.status
    project = project.model_copy(update={**fields, "participants": participants, "updated_date": _now()})
    try:
        await repo.replace(project, etag)
    except ConcurrencyConflict as exc:
        raise _concurrent_update(project_id) from exc
    await session.commit()
    logger.info("Project %s edited by %s", project_id, owner_id)

    await _refresh_index(indexer)
    return project


async def join_project(
    session: AsyncSession,
    project_id: str,
    owner_id: str,
    user_id: str,
    user_name: str,
    indexer: SearchIndexer | None = None,
) -> Project:
    """Add the caller to a NotStarted or Active project with free capacity.

    Membership changes do not advance ``updated_date``.
    """

    def add_participant(project: Project) -> None:
        _ensure_not_closed(project)
        if not project.status or not project.status.is_joinable:
            raise _reject(project, "PROJECT_NOT_ACTIVE", "Project is not open for joining")
        if project.has_participant(user_id):
            raise _reject(project, "ALREADY_PARTICIPANT", "User already joined this project", user_id=user_id)
        if project.is_full:
            raise _reject(project, "CAPACITY_REACHED", "Project team is full", team_size=project.team_size)
        project.participants.append(
            Participant(user_id=user_id, display_name=clean_display_name(user_name))
        )

    project = await _update_with_retry(session, owner_id, project_id, add_participant)
    logger.info("User %s joined project %s", user_id, project_id)

    await _refresh_index(indexer)
    return project


async def leave_project(
    session: AsyncSession,
    project_id: str,
    owner_id: str,
    user_id: str,
    indexer: SearchIndexer | None = None,
) -> Project:
    """Remove the caller from a non-closed project they joined."""

    def remove_participant(project: Project) -> None:
        _ensure_not_closed(project)
        if not project.has_participant(user_id):
            raise _reject(project, "NOT_PARTICIPANT", "User is not a participant", user_id=user_id)
        project.participants = [p for p in project.participants if p.user_id != user_id]

    project = await _update_with_retry(session, owner_id, project_id, remove_participant)
    logger.info("User %s left project %s", user_id, project_id)

    await _refresh_index(indexer)
    return project


async def close_project(
    session: AsyncSession,
    owner_id: str,
    request: CloseProjectRequest,
    indexer: SearchIndexer | None = None,
) -> Project:
    """Close an Active project and record what each participant acquired.

    Acquired skills are committed before the project itself. If the project
    update then fails the project stays Active; running close again
    overwrites the same skill records and finishes the transition.
    """
    repo = ProjectRepository(session)
    project, etag = await _load(repo, owner_id, request.project_id)
    _ensure_not_closed(project)
    if project.status != ProjectStatus.ACTIVE:
        raise _reject(project, "PROJECT_NOT_ACTIVE", "Only active projects can be closed")

    feedback = {entry.user_id: entry for entry in request.participants or []}
    missing = [user_id for user_id in project.participant_ids if user_id not in feedback]
    if missing:
        raise ValidationError(
            "Feedback is required for every participant",
            {"missing_participants": missing},
        )

    now = _now()
    skills_repo = AcquiredSkillRepository(session)
    for participant in project.participants:
        entry = feedback[participant.user_id]
        await skills_repo.upsert(
            AcquiredSkill(
                user_id=participant.user_id,
                project_id=project.project_id,
                acquired_skills=entry.acquired_skills,
                feedback=entry.feedback,
                project_title=project.title,
                project_owner_name=project.created_by_name,
                project_closed_date=now,
                created_date=now,
            )
        )
    await session.commit()

    project.status = ProjectStatus.CLOSED
    project.project_closed_date = now
    project.updated_date = now
    try:
        await repo.replace(project, etag)
    except ConcurrencyConflict as exc:
        raise _concurrent_update(project.project_id) from exc
    await session.commit()
    logger.info(
        "Project %s closed by %s (%d participants)",
        project.project_id,
        owner_id,
        len(project.participants),
    )

    await _refresh_index(indexer)
    return project


async def delete_project(
    session: AsyncSession,
    owner_id: str,
    project_id: str,
    indexer: SearchIndexer | None = None,
) -> Project:
    """Soft-delete a non-closed project; the record stays in the store."""
    repo = ProjectRepository(session)
    project, etag = await _load(repo, owner_id, project_id)
    _ensure_not_closed(project)

    project.is_removed = True
    project.updated_date = _now()
    try:
        await repo.replace(project, etag)
    except ConcurrencyConflict as exc:
        raise _concurrent_update(project_id) from exc
    await session.commit()
    logger.info("Project %s removed by %s", project_id, owner_id)

    await _refresh_index(indexer)
    return project
