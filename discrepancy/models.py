"""
Data models for the discrepancy checker.

Defines the Fact and conflict report schemas using Pydantic.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FactKind(str, Enum):
    """Kind of quantitative assertion."""
    MONETARY_AMOUNT = "monetary_amount"
    UNIT_COUNT = "unit_count"


class Fact(BaseModel):
    """
    A single quantitative assertion extracted from a document.

    Facts are immutable; grouping and reporting only ever read them.
    """

    kind: FactKind = Field(
        description="Monetary amount or unit count"
    )
    context_key: str = Field(
        description="Normalized, number-masked fingerprint of the surrounding text"
    )
    value: float = Field(
        ge=0,
        allow_inf_nan=False,
        description="Fully normalized numeric value (magnitude suffix applied)"
    )
    unit: str | None = Field(
        default=None,
        description="Unit noun for unit counts (e.g. 'vehicles'); None for money"
    )
    raw_text: str = Field(
        description="Original matched substring"
    )
    source_document: str = Field(
        description="Identifier of the document the fact came from"
    )
    offset: int = Field(
        default=0,
        ge=0,
        description="Character offset of the match within the document"
    )

    class Config:
        use_enum_values = True
        frozen = True

    @property
    def is_monetary(self) -> bool:
        return self.kind == FactKind.MONETARY_AMOUNT

    @property
    def display_value(self) -> str:
        """Human readable value ($1,000,000 for money, 12 for counts)."""
        from discrepancy.extraction.numbers import format_currency, format_number

        if self.is_monetary:
            return format_currency(self.value)
        return format_number(self.value)

    def to_display_dict(self) -> dict:
        """Convert to a dictionary suitable for display."""
        return {
            "Kind": "Money" if self.is_monetary else "Count",
            "Value": self.display_value,
            "Unit": self.unit or "",
            "Raw": self.raw_text,
            "Context": self.context_key,
            "Document": self.source_document,
        }


class ValueOccurrence(BaseModel):
    """One distinct value inside a conflict, with where it was seen."""

    value: float = Field(description="Normalized numeric value")
    display_value: str = Field(description="Formatted value for reports")
    documents: list[str] = Field(
        default_factory=list,
        description="Documents containing this value (deduplicated, first-seen order)"
    )
    raw_forms: list[str] = Field(
        default_factory=list,
        description="Original textual forms of this value (deduplicated)"
    )


class DirectConflict(BaseModel):
    """Distinct values stated under one identical context key."""

    context_key: str = Field(description="Shared context key")
    values: list[ValueOccurrence] = Field(
        description="Distinct values in order of first appearance"
    )
    fact_count: int = Field(
        default=0,
        description="Number of facts under the key"
    )


class SimilarContextConflict(BaseModel):
    """Distinct values stated under similar (word-overlapping) context keys."""

    context_keys: list[str] = Field(
        description="Keys of the similarity cluster, in order encountered"
    )
    values: list[ValueOccurrence] = Field(
        description="Distinct values in order of first appearance"
    )
    fact_count: int = Field(
        default=0,
        description="Number of facts across all keys of the cluster"
    )


class ConflictReport(BaseModel):
    """Result of one full corpus scan."""

    direct_conflicts: list[DirectConflict] = Field(default_factory=list)
    similar_context_conflicts: list[SimilarContextConflict] = Field(default_factory=list)
    total_facts: int = Field(default=0, description="Facts extracted across the corpus")
    unique_keys: int = Field(default=0, description="Distinct context keys")
    documents_scanned: int = Field(default=0, description="Documents handed to the extractor")
    documents_skipped: int = Field(
        default=0,
        description="Documents the corpus loader could not read or that exceeded the size cap"
    )

    @property
    def has_conflicts(self) -> bool:
        return bool(self.direct_conflicts or self.similar_context_conflicts)

    def summary_line(self) -> str:
        """One-line summary in the format printed after every scan."""
        return (
            f"{self.total_facts} facts, {self.unique_keys} context keys; "
            f"{len(self.direct_conflicts)} direct conflicts, "
            f"{len(self.similar_context_conflicts)} similar-context groups."
        )
