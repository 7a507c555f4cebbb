"""Corpus discovery and document loading."""

from .walker import CorpusError, walk_corpus
from .loader import load_document, iter_documents

__all__ = [
    "CorpusError",
    "walk_corpus",
    "load_document",
    "iter_documents",
]
