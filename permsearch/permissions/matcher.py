"""
Decide whether an entry's owner, group and permissions satisfy a policy.
"""

from .codec import PermissionBlock
from .filters import Filter, FilterSet


def clause_matches(filter: Filter, owner: int, group: int, perm: PermissionBlock) -> bool:
    """
    Check one clause against an entry.

    Every field present on the clause must agree with the entry; absent
    fields match anything and wildcard permission bits are ignored.
    """
    if filter.user_owner is not None and filter.user_owner != owner:
        return False

    if filter.group_owner is not None and filter.group_owner != group:
        return False

    if filter.permissions is not None and not filter.permissions.is_compatible(perm):
        return False

    return True


def set_matches(filter_set: FilterSet, owner: int, group: int, perm: PermissionBlock) -> bool:
    """True when at least one clause of the set matches the entry."""
    return any(clause_matches(clause, owner, group, perm) for clause in filter_set)
