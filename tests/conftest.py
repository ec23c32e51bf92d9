"""Pytest configuration for the `tests/` suite.

Puts the repository root on `sys.path` so the suite also runs from a plain
checkout without an editable install, and provides an in-memory filesystem
for the tree walker tests.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]

if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from permsearch.permissions import DirectoryEntry, EntryMetadata  # noqa: E402


class FakeFilesystem:
    """Dictionary backed metadata provider and directory lister."""

    def __init__(self):
        self.nodes: dict[str, EntryMetadata] = {}
        self.children: dict[str, list[DirectoryEntry]] = {}
        self.broken: dict[str, OSError] = {}
        self.unlistable: dict[str, OSError] = {}

    def add_dir(self, path, mode=0o755, uid=1000, gid=1000):
        self.nodes[path] = EntryMetadata(True, False, False, uid, gid, 0o040000 | mode)
        self.children.setdefault(path, [])
        self._link(path, is_symlink=False)

    def add_file(self, path, mode=0o644, uid=1000, gid=1000):
        self.nodes[path] = EntryMetadata(False, True, False, uid, gid, 0o100000 | mode)
        self._link(path, is_symlink=False)

    def add_symlink(self, path, target):
        meta = self.nodes[target]
        self.nodes[path] = EntryMetadata(
            meta.is_directory, meta.is_regular_file, True, meta.owner_id, meta.group_id, meta.mode
        )
        self._link(path, is_symlink=True)

    def add_broken(self, path, is_symlink=False, error=None):
        self.broken[path] = error or FileNotFoundError(2, "No such file or directory")
        self._link(path, is_symlink=is_symlink)

    def deny_listing(self, path):
        self.unlistable[path] = PermissionError(13, "Permission denied")

    def _link(self, path, is_symlink):
        parent, _, _ = path.rpartition("/")
        if parent in self.children:
            self.children[parent].append(DirectoryEntry(path, is_symlink))

    def stat(self, path):
        if path in self.broken:
            raise self.broken[path]
        return self.nodes[path]

    def listdir(self, path):
        if path in self.unlistable:
            raise self.unlistable[path]
        return list(self.children[path])


@pytest.fixture
def fake_fs():
    return FakeFilesystem()
