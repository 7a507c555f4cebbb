"""
Fact extraction using regular expressions.

Pulls currency amounts and unit counts out of a document's text and tags
each one with a context key.
"""

import logging
import re

from discrepancy.config import Config
from discrepancy.models import Fact, FactKind

from .context_key import build_context_key
from .numbers import MAGNITUDE_PATTERN, parse_currency

logger = logging.getLogger(__name__)


MONETARY_RE = re.compile(
    r"\$[\d,]+(?:\.\d+)?(?:\s*(?:" + MAGNITUDE_PATTERN + r")\b)?",
    re.IGNORECASE,
)

UNIT_NOUNS = [
    "vehicles?",
    "sites?",
    "units?",
    "acres?",
    "metres?",
    "dogs?",
    r"grill\s+sites?",
    "fleet",
    "years?",
    "months?",
    "treehouses?",
    "sections?",
    "nodes?",
]

UNIT_COUNT_RE = re.compile(
    r"\b(\d{1,4})\s*(" + "|".join(UNIT_NOUNS) + r")\b",
    re.IGNORECASE,
)

# Vocabulary that shows up around "$1"-style matches in embedded scripts
CODE_LIKE_RE = re.compile(r"replace|regex|exec|match|substr|char")

# Monetary values below this are checked for code-like context
CODE_LIKE_VALUE_LIMIT = 10


class FactExtractor:
    """
    Extracts monetary amounts and unit counts from document text.

    Usage:
        extractor = FactExtractor()
        facts = extractor.extract_facts(text, "about/index.html")
    """

    def __init__(
        self,
        max_document_bytes: int | None = None,
        min_monetary_key_length: int | None = None,
        min_count_key_length: int | None = None,
    ):
        """
        Initialize the fact extractor.

        Args:
            max_document_bytes: Documents larger than this are skipped
                (defaults to MAX_FILE_MB)
            min_monetary_key_length: Shortest context key accepted for money
            min_count_key_length: Shortest context key accepted for counts
        """
        self.max_document_bytes = (
            max_document_bytes
            if max_document_bytes is not None
            else Config.max_document_bytes()
        )
        self.min_monetary_key_length = (
            min_monetary_key_length
            if min_monetary_key_length is not None
            else Config.MIN_MONETARY_KEY_LENGTH
        )
        self.min_count_key_length = (
            min_count_key_length
            if min_count_key_length is not None
            else Config.MIN_COUNT_KEY_LENGTH
        )

    def should_skip(self, text: str) -> bool:
        """True for empty, oversized, or binary (NUL-containing) documents."""
        if not text:
            return True
        if len(text) > self.max_document_bytes:
            return True
        if len(text.encode("utf-8", errors="replace")) > self.max_document_bytes:
            return True
        return "\x00" in text

    def extract_facts(self, text: str, source_document: str) -> list[Fact]:
        """
        Extract facts from one document.

        Args:
            text: Full document text
            source_document: Identifier recorded on every fact

        Returns:
            Facts in order of appearance (empty for skipped documents)
        """
        if self.should_skip(text):
            logger.debug(f"Skipping {source_document}: empty, oversized or binary")
            return []

        facts = self._extract_monetary(text, source_document)
        facts.extend(self._extract_unit_counts(text, source_document))
        facts.sort(key=lambda f: f.offset)

        logger.debug(f"Extracted {len(facts)} facts from {source_document}")
        return facts

    def _extract_monetary(self, text: str, source_document: str) -> list[Fact]:
        facts = []

        for match in MONETARY_RE.finditer(text):
            value = parse_currency(match.group(0))
            if value is None:
                continue

            key = build_context_key(text, match.start())
            if len(key) < self.min_monetary_key_length:
                continue

            if value < CODE_LIKE_VALUE_LIMIT and CODE_LIKE_RE.search(key):
                continue

            facts.append(Fact(
                kind=FactKind.MONETARY_AMOUNT,
                context_key=key,
                value=value,
                raw_text=match.group(0),
                source_document=source_document,
                offset=match.start(),
            ))

        return facts

    def _extract_unit_counts(self, text: str, source_document: str) -> list[Fact]:
        facts = []

        for match in UNIT_COUNT_RE.finditer(text):
            key = build_context_key(text, match.start())
            if len(key) < self.min_count_key_length:
                continue

            facts.append(Fact(
                kind=FactKind.UNIT_COUNT,
                context_key=key,
                value=float(int(match.group(1))),
                unit=" ".join(match.group(2).lower().split()),
                raw_text=match.group(0),
                source_document=source_document,
                offset=match.start(),
            ))

        return facts

    def extract_facts_batch(
        self,
        documents,
    ) -> list[Fact]:
        """
        Extract facts from multiple documents.

        Args:
            documents: Iterable of (document_id, text) pairs

        Returns:
            Combined list of all extracted facts, in corpus order
        """
        all_facts: list[Fact] = []

        for document_id, text in documents:
            all_facts.extend(self.extract_facts(text, document_id))

        return all_facts


def extract_facts(text: str, source_document: str) -> list[Fact]:
    """Extract facts with the default settings."""
    return FactExtractor().extract_facts(text, source_document)
