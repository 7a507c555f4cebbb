"""
Corpus discovery.

Walks a document root and returns the text-bearing files to scan.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class CorpusError(Exception):
    """Raised when the corpus itself cannot be obtained."""
    pass


def _is_ignored(name: str, relative: str, ignore: set[str]) -> bool:
    return name in ignore or relative in ignore


def walk_corpus(
    root: str | Path,
    extensions: list[str] | set[str],
    ignore: list[str] | set[str] | None = None,
) -> list[str]:
    """
    List documents under a root directory.

    Entries are visited in sorted order so repeated runs see the corpus in
    the same order. Ignore entries match either a file/directory name
    (".git") or a relative path ("docs/assets").

    Args:
        root: Corpus root directory
        extensions: Allowed file extensions, e.g. [".md", ".html"]
        ignore: Names or relative paths to skip

    Returns:
        Relative POSIX paths of matching documents

    Raises:
        CorpusError: If the root does not exist or is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise CorpusError(f"Corpus root is not a directory: {root}")

    allowed = {ext.lower() for ext in extensions}
    ignore_set = set(ignore or [])

    return _walk(root, "", allowed, ignore_set)


def _walk(root: Path, prefix: str, allowed: set[str], ignore: set[str]) -> list[str]:
    directory = root / prefix if prefix else root

    try:
        entries = sorted(os.scandir(directory), key=lambda e: e.name)
    except OSError as e:
        logger.warning(f"Cannot list {directory}: {e}")
        return []

    found = []
    for entry in entries:
        relative = f"{prefix}/{entry.name}" if prefix else entry.name
        if _is_ignored(entry.name, relative, ignore):
            continue

        # Symlinked directories are not followed
        if entry.is_dir(follow_symlinks=False):
            found.extend(_walk(root, relative, allowed, ignore))
        elif Path(entry.name).suffix.lower() in allowed:
            found.append(relative)

    return found
