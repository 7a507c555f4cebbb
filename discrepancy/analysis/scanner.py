"""
Corpus scan pipeline.

Runs the fact extractor over every document of a corpus, pools the facts,
and hands them to the conflict detector.
"""

import logging
from pathlib import Path
from typing import Iterable

from discrepancy.config import Config
from discrepancy.corpus import walk_corpus, iter_documents
from discrepancy.extraction.fact_extractor import FactExtractor
from discrepancy.models import Fact, ConflictReport

from .conflict_detector import ConflictDetector, group_by_context_key

logger = logging.getLogger(__name__)


class DiscrepancyScanner:
    """
    Scans a corpus for conflicting quantitative facts.

    Usage:
        scanner = DiscrepancyScanner()
        report = scanner.scan_directory("site/")
    """

    def __init__(
        self,
        extractor: FactExtractor | None = None,
        detector: ConflictDetector | None = None,
    ):
        self.extractor = extractor or FactExtractor()
        self.detector = detector or ConflictDetector()

    def collect_facts(
        self,
        documents: Iterable[tuple[str, str | None]],
    ) -> tuple[list[Fact], int, int]:
        """
        Extract and pool facts from (document_id, text) pairs.

        A text of None marks a document the corpus loader skipped.

        Returns:
            (facts, documents scanned, documents skipped)
        """
        facts: list[Fact] = []
        scanned = 0
        skipped = 0

        for document_id, text in documents:
            if text is None:
                skipped += 1
                continue
            scanned += 1
            facts.extend(self.extractor.extract_facts(text, document_id))

        return facts, scanned, skipped

    def scan_documents(
        self,
        documents: Iterable[tuple[str, str | None]],
    ) -> ConflictReport:
        """
        Scan an in-memory corpus.

        Args:
            documents: (document_id, text) pairs in corpus order

        Returns:
            Conflict report over the whole corpus
        """
        facts, scanned, skipped = self.collect_facts(documents)
        return self.build_report(facts, scanned, skipped)

    def build_report(
        self,
        facts: list[Fact],
        documents_scanned: int = 0,
        documents_skipped: int = 0,
    ) -> ConflictReport:
        """Run conflict detection over pooled facts."""
        direct, similar = self.detector.detect_conflicts(facts)

        report = ConflictReport(
            direct_conflicts=direct,
            similar_context_conflicts=similar,
            total_facts=len(facts),
            unique_keys=len(group_by_context_key(facts)),
            documents_scanned=documents_scanned,
            documents_skipped=documents_skipped,
        )

        logger.info(f"Scan complete: {report.summary_line()}")
        return report

    def iter_directory(
        self,
        root: str | Path,
        extensions: list[str] | None = None,
        ignore: list[str] | None = None,
        include_rich_documents: bool = False,
    ):
        """
        Walk a directory and yield its documents as (document_id, text).

        Raises:
            CorpusError: If the root cannot be listed
        """
        if extensions is None:
            extensions = list(Config.TEXT_EXTENSIONS)
            if include_rich_documents:
                extensions += Config.RICH_DOCUMENT_EXTENSIONS
        if ignore is None:
            ignore = Config.IGNORE_NAMES

        paths = walk_corpus(root, extensions, ignore)
        logger.info(f"Found {len(paths)} documents under {root}")

        return iter_documents(root, paths, self.extractor.max_document_bytes)

    def scan_directory(
        self,
        root: str | Path,
        extensions: list[str] | None = None,
        ignore: list[str] | None = None,
        include_rich_documents: bool = False,
    ) -> ConflictReport:
        """
        Scan every matching document under a directory.

        Args:
            root: Corpus root directory
            extensions: Allowed extensions (defaults to TEXT_EXTENSIONS)
            ignore: Names or relative paths to skip (defaults to IGNORE_NAMES)
            include_rich_documents: Also read PDF and Excel files

        Returns:
            Conflict report over the whole corpus

        Raises:
            CorpusError: If the root cannot be listed
        """
        documents = self.iter_directory(root, extensions, ignore, include_rich_documents)
        return self.scan_documents(documents)
