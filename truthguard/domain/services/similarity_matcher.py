"""Token-set similarity between claim texts."""

import re
from typing import Optional, Set

DEFAULT_THRESHOLD = 0.6
MIN_TOKEN_LENGTH = 3

_PUNCTUATION = re.compile(r"[^\w\s]")


def tokenize(text: str) -> Set[str]:
    """Normalize a text into its set of significant tokens.

    Lowercases, strips punctuation, splits on whitespace and drops tokens
    shorter than three characters.

    Args:
        text: Raw claim text

    Returns:
        Set of normalized tokens
    """
    cleaned = _PUNCTUATION.sub("", (text or "").lower())
    return {token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH}


class SimilarityMatcher:
    """Scores claim texts with the Jaccard index of their token sets."""

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        """Initialize the matcher.

        Args:
            threshold: Default minimum score for two texts to count as duplicates

        Raises:
            ValueError: If threshold is outside [0, 1]
        """
        self._threshold = self._check_threshold(threshold)

    @staticmethod
    def _check_threshold(threshold: float) -> float:
        if not 0 <= threshold <= 1:
            raise ValueError("Similarity threshold must be between 0 and 1")
        return threshold

    @property
    def threshold(self) -> float:
        """Default duplicate threshold."""
        return self._threshold

    def similarity(self, text_a: str, text_b: str) -> float:
        """Compute the similarity of two texts.

        Args:
            text_a: First text
            text_b: Second text

        Returns:
            Score between 0 and 1; 0 when neither text has any token
        """
        tokens_a = tokenize(text_a)
        tokens_b = tokenize(text_b)
        union = tokens_a | tokens_b
        if not union:
            return 0.0
        return len(tokens_a & tokens_b) / len(union)

    def is_duplicate(self, text_a: str, text_b: str, threshold: Optional[float] = None) -> bool:
        """Check if two texts are similar enough to be duplicates.

        Args:
            text_a: First text
            text_b: Second text
            threshold: Override for the default threshold

        Returns:
            True if the similarity meets the threshold
        """
        if threshold is None:
            threshold = self._threshold
        else:
            threshold = self._check_threshold(threshold)
        return self.similarity(text_a, text_b) >= threshold
