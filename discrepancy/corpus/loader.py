"""
Document loading for corpus scans.

Reads one document at a time into memory as text. Oversized or
unreadable documents are skipped, never fatal.
"""

import logging
from pathlib import Path
from typing import Iterator

from .excel_reader import read_excel_text
from .pdf_reader import read_pdf_text

logger = logging.getLogger(__name__)


RICH_READERS = {
    ".pdf": read_pdf_text,
    ".xlsx": read_excel_text,
    ".xls": read_excel_text,
}


def load_document(
    root: str | Path,
    relative_path: str,
    max_bytes: int,
) -> str | None:
    """
    Load a document's text.

    Args:
        root: Corpus root directory
        relative_path: Document path relative to the root
        max_bytes: Size cap; larger files are not read at all

    Returns:
        The document text, or None if it was skipped
    """
    path = Path(root) / relative_path

    try:
        size = path.stat().st_size
    except OSError as e:
        logger.warning(f"Cannot stat {relative_path}: {e}")
        return None

    if size > max_bytes:
        logger.debug(f"Skipping {relative_path}: {size} bytes exceeds {max_bytes}")
        return None

    reader = RICH_READERS.get(path.suffix.lower())
    if reader is not None:
        try:
            return reader(path)
        except Exception as e:
            logger.warning(f"Failed to read {relative_path}: {e}")
            return None

    try:
        return path.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Failed to read {relative_path}: {e}")
        return None


def iter_documents(
    root: str | Path,
    paths: list[str],
    max_bytes: int,
) -> Iterator[tuple[str, str | None]]:
    """
    Yield (document_id, text) pairs in corpus order.

    Skipped documents are yielded with text None so callers can count them.
    """
    for relative_path in paths:
        yield relative_path, load_document(root, relative_path, max_bytes)
