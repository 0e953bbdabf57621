"""Recursive lookup of files by extension."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Set

from .criteria import normalize_extension

logger = logging.getLogger(__name__)


class EnumerationError(OSError):
    """Raised when a directory in the scanned tree cannot be read."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class TraversalError:
    """A subdirectory that was skipped during a non-strict scan."""

    path: str
    error: OSError


class DirectoryEnumerator:
    """Walks a directory tree and collects files whose names end with an extension.

    The root directory must be readable, otherwise :class:`EnumerationError`
    is raised and nothing is returned. Failures below the root are handled
    according to ``strict``: when false (the default) the unreadable
    directory is skipped and recorded in :attr:`errors`; when true the first
    failure aborts the scan.

    Symlinked directories are only descended when ``follow_symlinks`` is set,
    and each resolved directory is then visited at most once.
    """

    def __init__(self, *, strict: bool = False, follow_symlinks: bool = False):
        self.strict = strict
        self.follow_symlinks = follow_symlinks
        self.errors: List[TraversalError] = []

    def enumerate(self, root_dir: str, extension: str) -> List[str]:
        if not root_dir:
            raise ValueError("root_dir must not be empty")
        if not extension:
            raise ValueError("extension must not be empty")

        suffix = normalize_extension(extension)
        root = os.path.abspath(os.fspath(root_dir))
        self.errors = []

        results: List[str] = []
        visited: Set[str] = set()
        pending: List[str] = [root]

        while pending:
            directory = pending.pop()
            if self.follow_symlinks:
                real = os.path.realpath(directory)
                if real in visited:
                    logger.debug("Skipping already visited directory %s", directory)
                    continue
                visited.add(real)

            try:
                self._scan_directory(directory, suffix, pending, results)
            except OSError as exc:
                if directory == root:
                    raise EnumerationError(f"Cannot read root directory {root}: {exc}", root) from exc
                if self.strict:
                    raise EnumerationError(f"Cannot read directory {directory}: {exc}", directory) from exc
                logger.warning("Skipping unreadable directory %s: %s", directory, exc)
                self.errors.append(TraversalError(path=directory, error=exc))

        logger.debug(
            "Found %s file(s) matching %s under %s (%s skipped)",
            len(results),
            suffix,
            root,
            len(self.errors),
        )
        return results

    def _scan_directory(self, directory: str, suffix: str, pending: List[str], results: List[str]) -> None:
        matches: List[str] = []
        subdirectories: List[str] = []
        with os.scandir(directory) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=self.follow_symlinks):
                    subdirectories.append(entry.path)
                elif entry.is_dir(follow_symlinks=True):
                    logger.debug("Not following symlinked directory %s", entry.path)
                elif entry.name.endswith(suffix):
                    matches.append(entry.path)
        # Only commit once the whole listing succeeded
        results.extend(matches)
        pending.extend(subdirectories)


def find_files_by_extension(root_dir: str, extension: str, *, strict: bool = False) -> List[str]:
    """Return absolute paths of all files under ``root_dir`` ending with ``extension``."""

    return DirectoryEnumerator(strict=strict).enumerate(root_dir, extension)
