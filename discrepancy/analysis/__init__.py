"""
Analysis module for extracted facts.

Provides conflict detection and the corpus scan pipeline.
"""

from .conflict_detector import (
    ConflictDetector,
    group_by_context_key,
    group_similar_keys,
)
from .scanner import DiscrepancyScanner

__all__ = [
    "ConflictDetector",
    "group_by_context_key",
    "group_similar_keys",
    "DiscrepancyScanner",
]
