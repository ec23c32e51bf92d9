"""
Policy filter grammar.

A policy is a comma-separated list of clauses. Each clause may contain a
9-character permission pattern at its start and ``u<uid>`` / ``g<gid>``
markers anywhere, in any order, e.g. ``rwx------g1000u1000``. A FilterSet
allows an entry when any one of its clauses matches.
"""

import logging
from dataclasses import dataclass

from .codec import PartialPermissionBlock, PermissionBlock
from .config import (
    CLAUSE_SEPARATOR,
    EXECUTE_CHAR,
    GROUP_MARKER,
    MAX_OWNER_ID,
    PERMISSION_GROUP_LENGTH,
    PERMISSION_PATTERN_LENGTH,
    READ_CHAR,
    UNSET_CHAR,
    USER_MARKER,
    WILDCARD_CHAR,
    WRITE_CHAR,
)
from .exceptions import FilterParseError

logger = logging.getLogger(__name__)

_ALLOWED_AT_POSITION = tuple(
    frozenset((letter, UNSET_CHAR, WILDCARD_CHAR))
    for letter in (READ_CHAR, WRITE_CHAR, EXECUTE_CHAR)
)
_ASCII_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class Filter:
    """One policy clause. Absent fields place no constraint on an entry."""

    user_owner: int | None = None
    group_owner: int | None = None
    permissions: PermissionBlock | None = None

    def is_empty(self) -> bool:
        return self.user_owner is None and self.group_owner is None and self.permissions is None

    def __str__(self) -> str:
        parts = []
        if self.user_owner is not None:
            parts.append(f"{USER_MARKER}{self.user_owner}")
        if self.group_owner is not None:
            parts.append(f"{GROUP_MARKER}{self.group_owner}")
        if self.permissions is not None:
            parts.append(str(self.permissions))
        return " ".join(parts)


@dataclass(frozen=True)
class FilterSet:
    """Ordered, non-empty collection of clauses combined with logical OR."""

    filters: tuple[Filter, ...]

    def __post_init__(self):
        if not self.filters:
            raise FilterParseError("No valid filter provided")

    def __iter__(self):
        return iter(self.filters)

    def __len__(self) -> int:
        return len(self.filters)

    @classmethod
    def from_string(cls, text: str) -> "FilterSet":
        return parse_filter_set(text)


def parse_filter_set(text: str) -> FilterSet:
    """
    Parse a policy string into a FilterSet.

    Clauses that carry neither a permission pattern nor an owner/group marker
    are dropped. Any malformed clause aborts the whole parse.

    Args:
        text: Policy string, e.g. ``"rwxr-x---u0,rwx------u1000g1000"``

    Returns:
        FilterSet with at least one clause

    Raises:
        FilterParseError: on a malformed clause, or when no clause survives
    """
    filters = []
    for clause in text.split(CLAUSE_SEPARATOR):
        parsed = parse_filter(clause)
        if parsed.is_empty():
            logger.debug(f"Dropping empty filter clause {clause!r}")
            continue
        filters.append(parsed)

    if not filters:
        raise FilterParseError("No valid filter provided")

    return FilterSet(tuple(filters))


def parse_filter(clause: str) -> Filter:
    """Parse a single clause. The result may be empty."""
    try:
        return Filter(
            user_owner=_find_marker_id(clause, USER_MARKER),
            group_owner=_find_marker_id(clause, GROUP_MARKER),
            permissions=_parse_permission_pattern(clause),
        )
    except FilterParseError as e:
        if e.clause is not None:
            raise
        raise FilterParseError(str(e), clause=clause) from e


def _has_permission_pattern(clause: str) -> bool:
    head = clause[:PERMISSION_PATTERN_LENGTH]
    if len(head) != PERMISSION_PATTERN_LENGTH:
        return False
    return all(
        character in _ALLOWED_AT_POSITION[index % PERMISSION_GROUP_LENGTH]
        for index, character in enumerate(head)
    )


def _parse_permission_pattern(clause: str) -> PermissionBlock | None:
    if not _has_permission_pattern(clause):
        return None

    groups = [
        clause[start : start + PERMISSION_GROUP_LENGTH]
        for start in range(0, PERMISSION_PATTERN_LENGTH, PERMISSION_GROUP_LENGTH)
    ]
    user, group, other = (PartialPermissionBlock.from_chars(chars) for chars in groups)
    return PermissionBlock(user=user, group=group, other=other)


def _find_marker_id(clause: str, marker: str) -> int | None:
    """Return the digits following the first ``marker`` that is followed by a digit."""
    start = clause.find(marker)
    while start != -1:
        end = start + 1
        while end < len(clause) and clause[end] in _ASCII_DIGITS:
            end += 1

        if end > start + 1:
            value = int(clause[start + 1 : end])
            if value > MAX_OWNER_ID:
                raise FilterParseError(
                    f'Id "{clause[start:end]}" at position {start} exceeds {MAX_OWNER_ID}.'
                )
            return value

        start = clause.find(marker, start + 1)

    return None
