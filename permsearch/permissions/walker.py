"""
Resilient tree walker.

Walks a directory tree depth-first, checks every in-scope entry against the
configured FilterSet and reports entries that match none of its clauses.
Per-entry errors (unreadable metadata, unreadable directories, broken
symlinks) are reported as warnings and the walk carries on with the rest of
the tree. Only a failure to read the root itself is raised to the caller.
"""

import logging
import os
import stat
from collections.abc import Callable
from dataclasses import dataclass

from permsearch.branding import print_access_error

from .codec import PermissionBlock, decode
from .config import (
    ENTRY_TYPE_DIRECTORY,
    ENTRY_TYPE_FILE,
    ENTRY_TYPE_SYMLINK,
    OWNER_FIELD_WIDTH,
    REPORT_LINE_FORMAT,
)
from .filters import FilterSet
from .matcher import set_matches

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryMetadata:
    """Resolved metadata of one filesystem entry."""

    is_directory: bool
    is_regular_file: bool
    is_symlink: bool
    owner_id: int
    group_id: int
    mode: int

    @classmethod
    def from_stat(cls, st: os.stat_result, is_symlink: bool = False) -> "EntryMetadata":
        return cls(
            is_directory=stat.S_ISDIR(st.st_mode),
            is_regular_file=stat.S_ISREG(st.st_mode),
            is_symlink=is_symlink,
            owner_id=st.st_uid,
            group_id=st.st_gid,
            mode=st.st_mode,
        )


@dataclass(frozen=True)
class DirectoryEntry:
    """A child yielded by a directory listing."""

    path: str
    is_symlink: bool = False


@dataclass(frozen=True)
class Violation:
    """An in-scope entry that no clause of its FilterSet allows."""

    path: str
    entry_type: str
    permissions: PermissionBlock
    owner_id: int
    group_id: int

    def format_line(self) -> str:
        return REPORT_LINE_FORMAT.format(
            entry_type=self.entry_type,
            permissions=self.permissions,
            owner=self.owner_id,
            group=self.group_id,
            width=OWNER_FIELD_WIDTH,
            path=self.path,
        )


@dataclass
class ScanSummary:
    """Counters collected during one walk."""

    checked: int = 0
    skipped: int = 0
    errors: int = 0
    violations: int = 0


def stat_entry(path: str) -> EntryMetadata:
    """
    Read metadata for ``path``.

    Symlinks are detected with ``lstat`` first; owner and mode always come
    from the dereferenced target.

    Raises:
        OSError: if the entry or the symlink target cannot be read
    """
    link_stat = os.lstat(path)
    if stat.S_ISLNK(link_stat.st_mode):
        return EntryMetadata.from_stat(os.stat(path), is_symlink=True)
    return EntryMetadata.from_stat(link_stat)


def list_directory(path: str) -> list[DirectoryEntry]:
    """
    List the children of a directory.

    The listing is consumed completely so no directory handle stays open
    while the children are visited.

    Raises:
        OSError: if the directory cannot be read
    """
    with os.scandir(path) as entries:
        return [DirectoryEntry(entry.path, entry.is_symlink()) for entry in entries]


class TreeWalker:
    """
    Apply directory and file policies to every entry below a root.

    Args:
        directory_filter: Policy for directories, or None to leave them unchecked
        file_filter: Policy for everything that is not a directory, or None
        ignore_symlinks: Skip symlinks entirely instead of checking their target
        metadata_provider: Callable returning EntryMetadata for a path
        directory_lister: Callable returning the DirectoryEntry children of a path
        report: Sink for violation lines
        warn: Sink for access warnings
    """

    def __init__(
        self,
        directory_filter: FilterSet | None = None,
        file_filter: FilterSet | None = None,
        ignore_symlinks: bool = False,
        metadata_provider: Callable[[str], EntryMetadata] = stat_entry,
        directory_lister: Callable[[str], list[DirectoryEntry]] = list_directory,
        report: Callable[[str], None] = print,
        warn: Callable[[str], None] = print_access_error,
    ):
        self.directory_filter = directory_filter
        self.file_filter = file_filter
        self.ignore_symlinks = ignore_symlinks
        self.metadata_provider = metadata_provider
        self.directory_lister = directory_lister
        self.report = report
        self.warn = warn

    def walk(self, root: str | os.PathLike) -> ScanSummary:
        """
        Walk the tree below ``root`` in depth-first pre-order.

        Raises:
            OSError: if the metadata of ``root`` cannot be read
        """
        root = os.fspath(root)
        summary = ScanSummary()

        root_meta = self.metadata_provider(root)
        root_type = ENTRY_TYPE_DIRECTORY if root_meta.is_directory else ENTRY_TYPE_FILE
        self._check(root, root_meta, root_type, summary)

        pending: list[DirectoryEntry] = []
        if root_meta.is_directory:
            self._push_children(root, pending, summary)

        while pending:
            entry = pending.pop()

            if entry.is_symlink:
                self._visit_symlink(entry, summary)
                continue

            try:
                meta = self.metadata_provider(entry.path)
            except OSError as e:
                self._absorb(f"accessing '{entry.path}': {e}", summary)
                continue

            if meta.is_symlink:
                # Lister did not flag it, the provider did.
                self._visit_symlink(DirectoryEntry(entry.path, is_symlink=True), summary, meta)
                continue

            entry_type = ENTRY_TYPE_DIRECTORY if meta.is_directory else ENTRY_TYPE_FILE
            self._check(entry.path, meta, entry_type, summary)

            if meta.is_directory:
                self._push_children(entry.path, pending, summary)

        logger.debug(
            f"Walk of {root} finished: {summary.checked} checked, "
            f"{summary.violations} violations, {summary.errors} errors"
        )
        return summary

    def _visit_symlink(
        self,
        entry: DirectoryEntry,
        summary: ScanSummary,
        meta: EntryMetadata | None = None,
    ) -> None:
        if self.ignore_symlinks:
            summary.skipped += 1
            return

        if meta is None:
            try:
                meta = self.metadata_provider(entry.path)
            except OSError as e:
                self._absorb(
                    f"reading symlink '{entry.path}': {e}. The symlink might be broken.",
                    summary,
                )
                return

        self._check(entry.path, meta, ENTRY_TYPE_SYMLINK, summary)

    def _push_children(self, path: str, pending: list[DirectoryEntry], summary: ScanSummary) -> None:
        try:
            children = self.directory_lister(path)
        except OSError as e:
            self._absorb(f"accessing '{path}': {e}", summary)
            return

        # Reversed so the stack pops children in listing order.
        pending.extend(reversed(children))

    def _filter_set_for(self, meta: EntryMetadata) -> FilterSet | None:
        if meta.is_directory:
            return self.directory_filter
        return self.file_filter

    def _check(self, path: str, meta: EntryMetadata, entry_type: str, summary: ScanSummary) -> None:
        filter_set = self._filter_set_for(meta)
        if filter_set is None:
            summary.skipped += 1
            return

        permissions = decode(meta.mode)
        summary.checked += 1

        if set_matches(filter_set, meta.owner_id, meta.group_id, permissions):
            return

        violation = Violation(
            path=path,
            entry_type=entry_type,
            permissions=permissions,
            owner_id=meta.owner_id,
            group_id=meta.group_id,
        )
        self.report(violation.format_line())
        summary.violations += 1

    def _absorb(self, message: str, summary: ScanSummary) -> None:
        summary.errors += 1
        logger.debug(message)
        self.warn(message)
