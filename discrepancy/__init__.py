"""Discrepancy checker - cross-document fact consistency for text corpora"""

__version__ = "0.1.0"

from discrepancy.analysis import (
    ConflictDetector,
    DiscrepancyScanner,
)
from discrepancy.extraction import FactExtractor
from discrepancy.models import Fact, FactKind, ConflictReport

__all__ = [
    "ConflictDetector",
    "DiscrepancyScanner",
    "FactExtractor",
    "Fact",
    "FactKind",
    "ConflictReport",
]
