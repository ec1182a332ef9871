"""In-memory refinement of search results the backend query cannot express.

Full-text matching over-selects: an any-of-these-terms skill query or a term
match against the participant id field can return projects that do not
actually contain the skill or the user. These functions re-check membership
precisely. All of them return an empty list for empty input.
"""

from collections.abc import Iterable

from grow.models.project import Project
from grow.search.query_builder import MATCH_ALL
from grow.serialization import split_tokens

DEFAULT_OWNER_LIMIT = 50


def _skill_set(skills: str | Iterable[str] | None) -> set[str]:
    if skills is None:
        return set()
    if isinstance(skills, str):
        return set(split_tokens(skills))
    return {skill.strip() for skill in skills if skill and skill.strip()}


def filter_by_skill_intersection(
    projects: Iterable[Project], skills: str | Iterable[str] | None
) -> list[Project]:
    """Keep projects sharing at least one skill with ``skills``.

    ``skills`` may be a ``;``-delimited string or a list; tokens are trimmed
    and compared exactly.
    """
    wanted = _skill_set(skills)
    if not wanted:
        return []
    return [p for p in projects if wanted.intersection(_skill_set(p.required_skills))]


def filter_by_participant(projects: Iterable[Project], user_id: str) -> list[Project]:
    """Keep projects that ``user_id`` has joined (exact id match)."""
    return [p for p in projects if p.has_participant(user_id)]


def unique_skills(projects: Iterable[Project], search_text: str) -> list[str]:
    """Distinct skills across ``projects`` containing ``search_text``, sorted.

    ``*`` selects every skill; otherwise matching is a case-insensitive
    substring test.
    """
    needle = (search_text or "").casefold()
    skills: set[str] = set()
    for project in projects:
        for skill in project.required_skills:
            skill = skill.strip()
            if not skill:
                continue
            if search_text == MATCH_ALL or needle in skill.casefold():
                skills.add(skill)
    return sorted(skills)


def top_owner_names(projects: Iterable[Project], limit: int = DEFAULT_OWNER_LIMIT) -> list[str]:
    """Names of the ``limit`` owners with most projects, in alphabetical order.

    Project count only decides which owners make the cut; equal counts keep
    the order in which owners first appear in ``projects``. The returned
    names are sorted by name, not by count.
    """
    groups: dict[str, list[Project]] = {}
    for project in projects:
        groups.setdefault(project.created_by_user_id, []).append(project)

    ranked = sorted(groups.values(), key=len, reverse=True)[:limit]
    return sorted(group[0].created_by_name for group in ranked)
