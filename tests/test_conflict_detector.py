"""
Tests for fact conflict detection.
"""

import pytest

from discrepancy.models import Fact, FactKind
from discrepancy.utils.similarity import KeywordIndex
from discrepancy.analysis.conflict_detector import (
    ConflictDetector,
    group_by_context_key,
    group_similar_keys,
    summarize_values,
    looks_like_code,
)


DONATION_KEY = "the foundation donated # to the shelter"
DONATION_KEY_NEW = "the foundation donated # to the new shelter"


def create_test_fact(
    context_key: str,
    value: float,
    source_document: str = "test_doc.md",
    raw_text: str | None = None,
    kind: FactKind = FactKind.MONETARY_AMOUNT,
) -> Fact:
    """Create a test fact with default values."""
    return Fact(
        kind=kind,
        context_key=context_key,
        value=value,
        unit="vehicles" if kind == FactKind.UNIT_COUNT else None,
        raw_text=raw_text or f"${value:,.0f}",
        source_document=source_document,
    )


class TestGrouping:
    """Tests for grouping helpers."""

    def test_group_by_context_key_keeps_order(self):
        """Test that keys appear in order of first appearance."""
        facts = [
            create_test_fact("key b", 1),
            create_test_fact("key a", 2),
            create_test_fact("key b", 3),
        ]

        by_key = group_by_context_key(facts)

        assert list(by_key) == ["key b", "key a"]
        assert [f.value for f in by_key["key b"]] == [1, 3]

    def test_summarize_values_deduplicates(self):
        """Test that documents and raw forms are listed once per value."""
        facts = [
            create_test_fact(DONATION_KEY, 5_000_000, "a.md", "$5 million"),
            create_test_fact(DONATION_KEY, 5_000_000, "a.md", "$5 million"),
            create_test_fact(DONATION_KEY, 5_000_000, "b.md", "$5M"),
            create_test_fact(DONATION_KEY, 6_000_000, "c.md", "$6 million"),
        ]

        occurrences = summarize_values(facts)

        assert [o.value for o in occurrences] == [5_000_000, 6_000_000]
        assert occurrences[0].documents == ["a.md", "b.md"]
        assert occurrences[0].raw_forms == ["$5 million", "$5M"]
        assert occurrences[0].display_value == "$5,000,000"

    def test_count_display_value(self):
        """Test that counts are displayed without a currency symbol."""
        facts = [create_test_fact("fleet of # vehicles", 12, kind=FactKind.UNIT_COUNT)]

        assert summarize_values(facts)[0].display_value == "12"


class TestGroupSimilarKeys:
    """Tests for greedy single-link clustering."""

    def test_clusters_are_disjoint_and_complete(self):
        """Test that every key lands in exactly one cluster."""
        keys = [DONATION_KEY, "completely unrelated words here", DONATION_KEY_NEW]

        clusters = group_similar_keys(keys)

        assert clusters == [[DONATION_KEY, DONATION_KEY_NEW], ["completely unrelated words here"]]

    def test_links_through_cluster_members(self):
        """Test that a key joins when linked to any member added earlier."""
        a = "alpha beta gamma delta"
        b = "alpha beta gamma epsilon zeta"
        c = "epsilon zeta eta gamma"

        # a~b and b~c, but a and c share only 'gamma'
        assert group_similar_keys([a, b, c]) == [[a, b, c]]

    def test_single_pass_does_not_revisit(self):
        """Test that a key skipped before its link joined stays separate."""
        p = "alpha beta gamma delta"
        q = "epsilon zeta eta gamma"
        r = "alpha beta gamma epsilon zeta"

        # q is only linked to r, which joins p's cluster after q was visited
        assert group_similar_keys([p, q, r]) == [[p, r], [q]]

    def test_empty(self):
        assert group_similar_keys([]) == []

    def test_many_keys_use_row_lookups(self, monkeypatch):
        """Test clustering thousands of keys with one similarity row at a time."""
        # Keys 2k and 2k+1 share two of four keywords (similarity 0.5)
        keys = [f"topic{i // 2} area{i // 2} detail{i}" for i in range(6000)]

        row_shapes = []
        original_row = KeywordIndex.similarity_row

        def recording_row(self, position):
            row = original_row(self, position)
            row_shapes.append(row.shape)
            return row

        monkeypatch.setattr(KeywordIndex, "similarity_row", recording_row)

        clusters = group_similar_keys(keys)

        assert clusters == [[keys[i], keys[i + 1]] for i in range(0, 6000, 2)]
        assert set(row_shapes) == {(6000,)}
        assert len(row_shapes) == 6000


class TestLooksLikeCode:
    """Tests for the code-like cluster guard."""

    def test_small_values_with_code_words(self):
        assert looks_like_code(["input replace pattern # with"], [1, 2])

    def test_large_values_are_kept(self):
        assert not looks_like_code(["input replace pattern # with"], [1, 25])

    def test_plain_prose(self):
        assert not looks_like_code(["the shelter has # dogs"], [3, 4])


class TestConflictDetector:
    """Tests for ConflictDetector class."""

    def test_no_facts(self):
        """Test with empty fact list."""
        direct, similar = ConflictDetector().detect_conflicts([])

        assert direct == []
        assert similar == []

    def test_direct_conflict(self):
        """Test two values under one key across two documents."""
        facts = [
            create_test_fact(DONATION_KEY, 5_000_000, "a.md"),
            create_test_fact(DONATION_KEY, 6_000_000, "b.md"),
        ]

        direct, similar = ConflictDetector().detect_conflicts(facts)

        assert len(direct) == 1
        assert direct[0].context_key == DONATION_KEY
        assert [(v.value, v.documents) for v in direct[0].values] == [
            (5_000_000, ["a.md"]),
            (6_000_000, ["b.md"]),
        ]
        assert direct[0].fact_count == 2
        assert similar == []

    def test_same_value_is_not_a_conflict(self):
        """Test that agreeing documents produce no conflict."""
        facts = [
            create_test_fact(DONATION_KEY, 5_000_000, "a.md"),
            create_test_fact(DONATION_KEY, 5_000_000, "b.md"),
        ]

        direct, similar = ConflictDetector().detect_conflicts(facts)

        assert direct == []
        assert similar == []

    def test_similar_context_conflict(self):
        """Test differing values under similar keys."""
        facts = [
            create_test_fact(DONATION_KEY, 5_000_000, "a.md"),
            create_test_fact(DONATION_KEY_NEW, 7_000_000, "b.md"),
        ]

        direct, similar = ConflictDetector().detect_conflicts(facts)

        assert direct == []
        assert len(similar) == 1
        assert similar[0].context_keys == [DONATION_KEY, DONATION_KEY_NEW]
        assert [v.value for v in similar[0].values] == [5_000_000, 7_000_000]

    def test_cluster_with_uncovered_key_is_reported(self):
        """Test that a cluster is reported when one key has no direct conflict."""
        facts = [
            create_test_fact(DONATION_KEY, 5_000_000, "a.md"),
            create_test_fact(DONATION_KEY, 6_000_000, "b.md"),
            create_test_fact(DONATION_KEY_NEW, 7_000_000, "c.md"),
        ]

        direct, similar = ConflictDetector().detect_conflicts(facts)

        assert len(direct) == 1
        assert len(similar) == 1
        assert [v.value for v in similar[0].values] == [5_000_000, 6_000_000, 7_000_000]

    def test_fully_covered_cluster_is_suppressed(self):
        """Test that a cluster whose keys are all direct conflicts is not repeated."""
        facts = [
            create_test_fact(DONATION_KEY, 5_000_000, "a.md"),
            create_test_fact(DONATION_KEY, 6_000_000, "b.md"),
            create_test_fact(DONATION_KEY_NEW, 7_000_000, "c.md"),
            create_test_fact(DONATION_KEY_NEW, 8_000_000, "d.md"),
        ]

        direct, similar = ConflictDetector().detect_conflicts(facts)

        assert len(direct) == 2
        assert similar == []

    def test_code_like_cluster_is_suppressed(self):
        """Test that small values under script vocabulary are ignored."""
        facts = [
            create_test_fact("input replace pattern # with first group", 1),
            create_test_fact("input replace pattern # with second group", 2),
        ]

        direct, similar = ConflictDetector().detect_conflicts(facts)

        assert direct == []
        assert similar == []

    def test_threshold_is_configurable(self):
        """Test that a stricter threshold separates the keys."""
        facts = [
            create_test_fact(DONATION_KEY, 5_000_000, "a.md"),
            create_test_fact(DONATION_KEY_NEW, 7_000_000, "b.md"),
        ]

        _, similar = ConflictDetector(similarity_threshold=0.9).detect_conflicts(facts)

        assert similar == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
