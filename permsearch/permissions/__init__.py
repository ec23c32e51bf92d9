"""
Permission policy parsing, matching and tree walking.
"""

from .codec import PartialPermissionBlock, PermissionBlock, PermissionState, decode, render
from .exceptions import FilterParseError
from .filters import Filter, FilterSet, parse_filter, parse_filter_set
from .matcher import clause_matches, set_matches
from .scan_config import ScanConfig
from .walker import (
    DirectoryEntry,
    EntryMetadata,
    ScanSummary,
    TreeWalker,
    Violation,
    list_directory,
    stat_entry,
)


def scan_path(
    path: str,
    directory_filter: str | None = None,
    file_filter: str | None = None,
    ignore_symlinks: bool = False,
) -> ScanSummary:
    """
    Simplified interface to scan a path against policy strings.

    Args:
        path: Directory path to scan
        directory_filter: Policy string for directories, or None
        file_filter: Policy string for files, or None
        ignore_symlinks: Skip symlinks

    Returns:
        ScanSummary of the walk
    """
    walker = TreeWalker(
        directory_filter=_parse_optional(directory_filter),
        file_filter=_parse_optional(file_filter),
        ignore_symlinks=ignore_symlinks,
    )
    return walker.walk(path)


def _parse_optional(text: str | None) -> FilterSet | None:
    return parse_filter_set(text) if text is not None else None


__all__ = [
    "DirectoryEntry",
    "EntryMetadata",
    "Filter",
    "FilterParseError",
    "FilterSet",
    "PartialPermissionBlock",
    "PermissionBlock",
    "PermissionState",
    "ScanConfig",
    "ScanSummary",
    "TreeWalker",
    "Violation",
    "clause_matches",
    "decode",
    "list_directory",
    "parse_filter",
    "parse_filter_set",
    "render",
    "scan_path",
    "set_matches",
]
