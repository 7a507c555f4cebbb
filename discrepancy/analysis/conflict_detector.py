"""
Fact conflict detection.

Groups extracted facts by context key and flags keys (or clusters of
similar keys) that carry more than one distinct value. Nothing here
decides which value is right; conflicts are surfaced for human review.
"""

import logging
import re

import numpy as np

from discrepancy.config import Config
from discrepancy.models import (
    Fact,
    ValueOccurrence,
    DirectConflict,
    SimilarContextConflict,
)
from discrepancy.utils.similarity import KeywordIndex

logger = logging.getLogger(__name__)


# Clusters of small values around this vocabulary come from embedded scripts
CODE_LIKE_KEY_RE = re.compile(r"replace|regex|exec|char|substr")
CODE_LIKE_CLUSTER_VALUE_LIMIT = 20


def group_by_context_key(facts: list[Fact]) -> dict[str, list[Fact]]:
    """Group facts by exact context key, keys in order of first appearance."""
    by_key: dict[str, list[Fact]] = {}
    for fact in facts:
        by_key.setdefault(fact.context_key, []).append(fact)
    return by_key


def distinct_values(facts: list[Fact]) -> list[float]:
    """Distinct values in order of first appearance."""
    return list(dict.fromkeys(f.value for f in facts))


def summarize_values(facts: list[Fact]) -> list[ValueOccurrence]:
    """
    Collapse facts into one entry per distinct value.

    Documents and raw forms are deduplicated, keeping first-seen order.
    """
    by_value: dict[float, list[Fact]] = {}
    for fact in facts:
        by_value.setdefault(fact.value, []).append(fact)

    occurrences = []
    for value, value_facts in by_value.items():
        occurrences.append(ValueOccurrence(
            value=value,
            display_value=value_facts[0].display_value,
            documents=list(dict.fromkeys(f.source_document for f in value_facts)),
            raw_forms=list(dict.fromkeys(f.raw_text for f in value_facts)),
        ))
    return occurrences


def group_similar_keys(keys: list[str], threshold: float = 0.5) -> list[list[str]]:
    """
    Cluster context keys by keyword similarity.

    Greedy single-link, one pass: keys are taken in order; an unassigned key
    starts a cluster and every later unassigned key whose similarity to any
    key already in that cluster reaches the threshold joins it. Keys are
    never reassigned, so transitively similar keys may end up split.

    Args:
        keys: Distinct context keys in order encountered
        threshold: Minimum similarity for two keys to be linked

    Returns:
        Disjoint clusters covering every key
    """
    if not keys:
        return []

    index = KeywordIndex(keys)
    assigned = np.zeros(len(keys), dtype=bool)
    clusters: list[list[str]] = []

    for i in range(len(keys)):
        if assigned[i]:
            continue

        members = [i]
        assigned[i] = True
        reachable = index.linked_row(i, threshold)

        # Every key before i is already assigned, so the scan starts after it
        start = i + 1
        while start < len(keys):
            candidates = np.flatnonzero(reachable[start:] & ~assigned[start:])
            if candidates.size == 0:
                break

            j = start + int(candidates[0])
            members.append(j)
            assigned[j] = True
            reachable |= index.linked_row(j, threshold)
            start = j + 1

        clusters.append([keys[m] for m in members])

    return clusters


def looks_like_code(keys: list[str], values: list[float]) -> bool:
    """Small values under script-like vocabulary are regex/substring noise."""
    return (
        all(v < CODE_LIKE_CLUSTER_VALUE_LIMIT for v in values)
        and any(CODE_LIKE_KEY_RE.search(k) for k in keys)
    )


class ConflictDetector:
    """
    Detects conflicting values among extracted facts.

    Usage:
        detector = ConflictDetector()
        direct, similar = detector.detect_conflicts(facts)
    """

    def __init__(self, similarity_threshold: float | None = None):
        """
        Initialize the conflict detector.

        Args:
            similarity_threshold: Keyword similarity needed to link two keys
                (defaults to SIMILARITY_THRESHOLD)
        """
        self.similarity_threshold = (
            similarity_threshold
            if similarity_threshold is not None
            else Config.SIMILARITY_THRESHOLD
        )

    def detect_conflicts(
        self,
        facts: list[Fact],
    ) -> tuple[list[DirectConflict], list[SimilarContextConflict]]:
        """
        Find direct and similar-context conflicts.

        Args:
            facts: Pooled facts from all documents

        Returns:
            (direct conflicts, similar-context conflicts)
        """
        by_key = group_by_context_key(facts)

        direct = self.find_direct_conflicts(by_key)
        similar = self.find_similar_context_conflicts(by_key, direct)

        logger.info(
            f"Detected {len(direct)} direct and {len(similar)} similar-context "
            f"conflicts across {len(by_key)} context keys"
        )
        return direct, similar

    def find_direct_conflicts(
        self,
        by_key: dict[str, list[Fact]],
    ) -> list[DirectConflict]:
        """Keys whose facts carry two or more distinct values."""
        conflicts = []

        for key, key_facts in by_key.items():
            if len(distinct_values(key_facts)) < 2:
                continue

            conflicts.append(DirectConflict(
                context_key=key,
                values=summarize_values(key_facts),
                fact_count=len(key_facts),
            ))

        return conflicts

    def find_similar_context_conflicts(
        self,
        by_key: dict[str, list[Fact]],
        direct_conflicts: list[DirectConflict],
    ) -> list[SimilarContextConflict]:
        """
        Clusters of similar keys whose facts carry two or more distinct values.

        A cluster is left out when every one of its keys already has a
        direct conflict, so the same disagreement is not reported twice.
        """
        reported_keys = {c.context_key for c in direct_conflicts}
        conflicts = []

        for cluster in group_similar_keys(list(by_key), self.similarity_threshold):
            if len(cluster) < 2:
                continue

            cluster_facts = [f for key in cluster for f in by_key[key]]
            values = distinct_values(cluster_facts)
            if len(values) < 2:
                continue

            if all(key in reported_keys for key in cluster):
                continue

            if looks_like_code(cluster, values):
                logger.debug(f"Ignoring code-like cluster: {cluster[0]!r}")
                continue

            conflicts.append(SimilarContextConflict(
                context_keys=cluster,
                values=summarize_values(cluster_facts),
                fact_count=len(cluster_facts),
            ))

        return conflicts
