"""Utility modules."""

from .similarity import keyword_tokens, keyword_similarity, KeywordIndex

__all__ = [
    "keyword_tokens",
    "keyword_similarity",
    "KeywordIndex",
]
