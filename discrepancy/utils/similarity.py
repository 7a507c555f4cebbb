"""
Word-overlap similarity between context keys.

Keys are compared as sets of keywords (Jaccard index). Batch lookups go
through an inverted index, one row of similarities at a time.
"""

import numpy as np

from discrepancy.extraction.context_key import PLACEHOLDER


def keyword_tokens(key: str) -> frozenset[str]:
    """Whitespace tokens longer than one character, minus the placeholder."""
    return frozenset(
        word for word in key.split()
        if len(word) > 1 and word != PLACEHOLDER
    )


def keyword_similarity(key_a: str, key_b: str) -> float:
    """
    Compute intersection-over-union of the keyword sets of two keys.

    Args:
        key_a: First context key
        key_b: Second context key

    Returns:
        Similarity score (0.0 to 1.0); 0.0 when both keys have no keywords
    """
    words_a = keyword_tokens(key_a)
    words_b = keyword_tokens(key_b)

    union = len(words_a | words_b)
    if union == 0:
        return 0.0

    return len(words_a & words_b) / union


class KeywordIndex:
    """
    Inverted keyword index over a fixed list of context keys.

    Similarities are computed one key against all keys at a time, from the
    posting lists of that key's keywords, so memory stays linear in the
    number of keys.

    Usage:
        index = KeywordIndex(keys)
        row = index.similarity_row(0)
    """

    def __init__(self, keys: list[str]):
        self.keys = list(keys)
        token_sets = [keyword_tokens(key) for key in self.keys]

        postings: dict[str, list[int]] = {}
        for position, tokens in enumerate(token_sets):
            for word in tokens:
                postings.setdefault(word, []).append(position)

        self._postings = {
            word: np.asarray(positions, dtype=np.int64)
            for word, positions in postings.items()
        }
        self._token_sets = token_sets
        self._sizes = np.asarray([len(t) for t in token_sets], dtype=np.int64)

    def __len__(self) -> int:
        return len(self.keys)

    def similarity_row(self, position: int) -> np.ndarray:
        """
        Compute the similarity of one key to every key in the index.

        Args:
            position: Index of the key in `keys`

        Returns:
            Length-N array of Jaccard similarities; 0.0 where both keys
            have no keywords
        """
        n = len(self.keys)
        tokens = self._token_sets[position]
        if not tokens:
            return np.zeros(n, dtype=np.float64)

        hits = np.concatenate([self._postings[word] for word in tokens])
        intersection = np.bincount(hits, minlength=n)
        union = self._sizes[position] + self._sizes - intersection

        similarity = np.zeros(n, dtype=np.float64)
        np.divide(intersection, union, out=similarity, where=union > 0)
        return similarity

    def linked_row(self, position: int, threshold: float) -> np.ndarray:
        """Boolean mask of keys whose similarity to `position` reaches the threshold."""
        return self.similarity_row(position) >= threshold
