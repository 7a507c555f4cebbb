"""
PDF text reader using PyMuPDF.

Extracts page text from PDF files for fact scanning.
"""

import logging
from pathlib import Path

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


def read_pdf_text(file_path: str | Path) -> str:
    """
    Extract the text of every page of a PDF.

    Args:
        file_path: Path to the PDF file

    Returns:
        Page texts joined by blank lines
    """
    file_path = Path(file_path)
    doc = fitz.open(str(file_path))

    try:
        pages = []
        for page in doc:
            text = _clean_pdf_text(page.get_text("text"))
            if text:
                pages.append(text)

        logger.debug(f"Read {len(pages)} pages of text from {file_path.name}")
        return "\n\n".join(pages)
    finally:
        doc.close()


def _clean_pdf_text(text: str) -> str:
    """
    Clean extracted PDF text.

    - Strip lines and drop page-number lines
    - Collapse runs of blank lines
    """
    cleaned_lines: list[str] = []

    for line in text.split("\n"):
        line = line.strip()

        # Skip empty lines in sequence
        if not line and cleaned_lines and not cleaned_lines[-1]:
            continue

        # Pure numbers on their own line are page numbers
        if line.isdigit():
            continue

        cleaned_lines.append(line)

    return "\n".join(cleaned_lines).strip()
