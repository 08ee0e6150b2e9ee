"""
Project tree — a staged, mutable view over the target project.

Every pipeline step reads and writes files through a ProjectTree,
never through the filesystem directly.  Reads fall through to disk;
writes are buffered in memory until ``commit()``.  That gives us:

    - dry-run for free (just don't commit)
    - all-or-nothing runs (a fatal error leaves the project untouched)
    - a change log of every file created or overwritten

A tree without a root is purely in-memory (used by tests).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Literal

from prettier_setup.core.errors import DocumentNotFoundError, FileAlreadyExistsError

logger = logging.getLogger(__name__)

ChangeKind = Literal["create", "overwrite"]


@dataclass(frozen=True)
class FileChange:
    """A file touched in the current session."""

    path: str
    kind: ChangeKind

    def to_dict(self) -> dict:
        return {"path": self.path, "kind": self.kind}


def normalize_path(path: str) -> str:
    """Normalize a tree path to a root-relative POSIX string.

    ``./package.json``, ``/package.json`` and ``package.json`` all map
    to ``package.json``.  Paths escaping the root are rejected.
    """
    parts: list[str] = []
    for part in PurePosixPath(path.replace("\\", "/")).parts:
        if part in ("/", "."):
            continue
        if part == "..":
            if not parts:
                raise ValueError(f"Path escapes the project root: {path}")
            parts.pop()
            continue
        parts.append(part)
    if not parts:
        raise ValueError(f"Empty tree path: {path!r}")
    return "/".join(parts)


class ProjectTree:
    """Staged file tree rooted at a project directory.

    Args:
        root: Project directory backing the tree, or None for an
            in-memory tree.
    """

    def __init__(self, root: Path | None = None):
        self._root = root.resolve() if root is not None else None
        self._staged: dict[str, bytes] = {}
        self._changes: dict[str, ChangeKind] = {}

    @classmethod
    def from_files(cls, files: dict[str, str | bytes]) -> ProjectTree:
        """Build an in-memory tree pre-populated with ``files``."""
        tree = cls()
        for path, content in files.items():
            data = content.encode("utf-8") if isinstance(content, str) else content
            tree._staged[normalize_path(path)] = data
        return tree

    @property
    def root(self) -> Path | None:
        return self._root

    @property
    def changes(self) -> list[FileChange]:
        """Files created or overwritten since the last commit, in touch order."""
        return [FileChange(path, kind) for path, kind in self._changes.items()]

    # ── Reads ───────────────────────────────────────────────────

    def exists(self, path: str) -> bool:
        """Whether ``path`` is a file in the tree."""
        key = normalize_path(path)
        if key in self._staged:
            return True
        disk = self._disk_path(key)
        return disk is not None and disk.is_file()

    def read(self, path: str) -> bytes | None:
        """Raw content of ``path``, or None if missing or unreadable."""
        key = normalize_path(path)
        if key in self._staged:
            return self._staged[key]
        disk = self._disk_path(key)
        if disk is None or not disk.is_file():
            return None
        try:
            return disk.read_bytes()
        except OSError as e:
            logger.debug("Cannot read %s: %s", disk, e)
            return None

    def read_text(self, path: str) -> str | None:
        """UTF-8 content of ``path``, or None if missing or unreadable."""
        data = self.read(path)
        if data is None:
            return None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.debug("Cannot decode %s as UTF-8: %s", path, e)
            return None

    # ── Writes (staged) ─────────────────────────────────────────

    def create(self, path: str, content: str | bytes) -> None:
        """Stage a new file.  Fails if ``path`` already exists."""
        if self.exists(path):
            raise FileAlreadyExistsError(normalize_path(path))
        self._write(normalize_path(path), content, "create")

    def overwrite(self, path: str, content: str | bytes) -> None:
        """Stage a full-content replacement of an existing file."""
        if not self.exists(path):
            raise DocumentNotFoundError(normalize_path(path))
        self._write(normalize_path(path), content, "overwrite")

    def _write(self, key: str, content: str | bytes, kind: ChangeKind) -> None:
        data = content.encode("utf-8") if isinstance(content, str) else content
        if kind == "overwrite" and self.read(key) == data:
            return
        self._staged[key] = data
        # A file created this session stays a "create" when rewritten
        self._changes.setdefault(key, kind)
        logger.debug("Staged %s %s (%d bytes)", kind, key, len(data))

    # ── Commit ──────────────────────────────────────────────────

    def commit(self) -> list[FileChange]:
        """Flush staged writes to disk and return what was written."""
        committed = self.changes
        if self._root is not None:
            for change in committed:
                target = self._root / change.path
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(self._staged[change.path])
                logger.info("%s %s", change.kind.upper(), change.path)
            # Disk is now the source of truth
            self._staged.clear()
        self._changes.clear()
        return committed

    def _disk_path(self, key: str) -> Path | None:
        if self._root is None:
            return None
        return self._root / key

    def __repr__(self) -> str:
        return f"<ProjectTree root={str(self._root) if self._root else None!r} pending={len(self._changes)}>"
