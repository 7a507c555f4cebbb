"""Fact extraction: numeric normalization, context keys, pattern matching."""

from .numbers import normalize_number, parse_currency, format_currency
from .context_key import build_context_key, PLACEHOLDER
from .fact_extractor import FactExtractor, extract_facts

__all__ = [
    "normalize_number",
    "parse_currency",
    "format_currency",
    "build_context_key",
    "PLACEHOLDER",
    "FactExtractor",
    "extract_facts",
]
