"""Build search query text and filter predicates from user filter selections.

All functions are pure and tolerate malformed input: blank or unusable
tokens are dropped, nothing raises.
"""

import re

from grow.serialization import split_tokens

# Reserved characters of the full Lucene query grammar used by the backend.
RESERVED_CHARACTERS = "_|\\@&?*+!-:~'^/(){}<>#[]"
_RESERVED_PATTERN = re.compile("([" + re.escape(RESERVED_CHARACTERS) + "])")

MATCH_ALL = "*"


def escape_for_query(text: str) -> str:
    """Backslash-escape every reserved character.

    Not idempotent: escaping already escaped text escapes the backslashes
    again, so each raw input must be escaped exactly once.
    """
    return _RESERVED_PATTERN.sub(r"\\\1", text)


def build_skills_query(skills: str | None) -> str:
    """Turn ``a;b; c`` into the any-of-these-terms query ``a b c``.

    An empty result means "match all"; callers send ``*`` in that case.
    """
    return " ".join(split_tokens(skills))


def build_status_filter(statuses: str | None) -> str | None:
    """``1;2;`` -> ``Status eq 1 or Status eq 2``; None when nothing usable."""
    codes = [token for token in split_tokens(statuses) if token.isdigit()]
    if not codes:
        return None
    return " or ".join(f"Status eq {code}" for code in codes)


def build_owner_filter(owner_names: str | None) -> str | None:
    names = split_tokens(owner_names)
    if not names:
        return None
    return " or ".join(f"CreatedByName eq '{escape_for_query(name)}'" for name in names)


def combine_filters(status_filter: str | None, owner_filter: str | None) -> str | None:
    if status_filter and owner_filter:
        return f"({status_filter}) and ({owner_filter})"
    if status_filter:
        return f"({status_filter})"
    if owner_filter:
        return f"({owner_filter})"
    return None


def build_filter_query(statuses: str | None, owner_names: str | None) -> str | None:
    """Filter-bar predicate for the selected statuses and owner names."""
    return combine_filters(build_status_filter(statuses), build_owner_filter(owner_names))


def build_skills_match_filter(skills: str | None) -> str | None:
    """Restrict a free-text search to projects matching any of ``skills``."""
    query = build_skills_query(skills)
    if not query:
        return None
    return f"search.ismatch('{escape_for_query(query)}', 'RequiredSkills')"


def quote_literal(value: str) -> str:
    """Render ``value`` as an OData string literal."""
    return "'" + value.replace("'", "''") + "'"
