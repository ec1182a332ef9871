"""Delimited-string codec used at the Record Store and search index boundary.

Skill lists, document links and participant lists are stored as ``;``-joined
strings. Everything above the storage and search adapters works with real
lists; only this module knows about the delimiter.
"""

from collections.abc import Iterable

from grow.models.project import Participant

DELIMITER = ";"
MAPPING_SEPARATOR = ":"


def split_tokens(value: str | None) -> list[str]:
    """Split a delimited string, trimming tokens and dropping blanks."""
    if not value:
        return []
    return [token.strip() for token in value.split(DELIMITER) if token.strip()]


def join_tokens(tokens: Iterable[str]) -> str:
    return DELIMITER.join(tokens)


def clean_display_name(name: str) -> str:
    """Replace delimiter characters in a display name with single spaces.

    Names come from token claims; a stray ``;`` or ``:`` would split one
    mapping entry into several.
    """
    return " ".join(name.replace(DELIMITER, " ").replace(MAPPING_SEPARATOR, " ").split())


def participant_ids_string(participants: Iterable[Participant]) -> str:
    return join_tokens(p.user_id for p in participants)


def participant_mapping_string(participants: Iterable[Participant]) -> str:
    return join_tokens(
        f"{p.user_id}{MAPPING_SEPARATOR}{clean_display_name(p.display_name)}" for p in participants
    )


def mapping_entry_user_id(entry: str) -> str:
    """Return the id part of an ``id:name`` mapping entry."""
    return entry.partition(MAPPING_SEPARATOR)[0].strip()


def parse_participants(user_ids: str | None, mapping: str | None) -> list[Participant]:
    """Rebuild the participant list from the stored ids and ``id:name`` mapping.

    The ids field decides membership and order; the mapping only supplies
    display names. Duplicate ids collapse to their first occurrence.
    """
    names: dict[str, str] = {}
    for entry in split_tokens(mapping):
        _, _, name = entry.partition(MAPPING_SEPARATOR)
        names.setdefault(mapping_entry_user_id(entry), name.strip())

    participants: list[Participant] = []
    seen: set[str] = set()
    for user_id in split_tokens(user_ids):
        if user_id in seen:
            continue
        seen.add(user_id)
        participants.append(Participant(user_id=user_id, display_name=names.get(user_id, "")))
    return participants
