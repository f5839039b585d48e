"""Duplicate detection and clustering over claim collections."""

import logging
from typing import Iterable, List, Optional, Set

from ..models.claim import Claim
from .similarity_matcher import SimilarityMatcher

logger = logging.getLogger(__name__)


class DuplicateGrouper:
    """Finds and clusters claims whose contents are similar."""

    def __init__(self, matcher: Optional[SimilarityMatcher] = None):
        """Initialize the grouper.

        Args:
            matcher: Similarity matcher; a default one is used when omitted
        """
        self._matcher = matcher or SimilarityMatcher()

    @property
    def matcher(self) -> SimilarityMatcher:
        """Similarity matcher used for comparisons."""
        return self._matcher

    def find_similar(
        self,
        text: str,
        claims: Iterable[Claim],
        threshold: Optional[float] = None,
    ) -> List[Claim]:
        """Return the claims whose content is similar to a text.

        Args:
            text: Text to compare against
            claims: Candidate claims, in the order results should keep
            threshold: Override for the matcher's default threshold

        Returns:
            Matching claims; empty when nothing matches
        """
        return [
            claim for claim in claims
            if self._matcher.is_duplicate(text, claim.content, threshold)
        ]

    def group_by_similarity(
        self,
        claims: List[Claim],
        threshold: Optional[float] = None,
    ) -> List[List[Claim]]:
        """Partition claims into similarity clusters.

        Claims are visited in order. Each unvisited claim seeds a new cluster
        which then takes every remaining unvisited claim similar to the seed.
        Members are compared with the seed only, so two members of a cluster
        need not be similar to each other.

        Args:
            claims: Claims to partition
            threshold: Override for the matcher's default threshold

        Returns:
            Clusters covering every input claim exactly once
        """
        groups: List[List[Claim]] = []
        processed: Set[int] = set()

        for i, seed in enumerate(claims):
            if i in processed:
                continue
            processed.add(i)
            group = [seed]

            for j in range(i + 1, len(claims)):
                if j in processed:
                    continue
                if self._matcher.is_duplicate(seed.content, claims[j].content, threshold):
                    group.append(claims[j])
                    processed.add(j)

            groups.append(group)

        logger.debug(f"🧩 Grouped {len(claims)} claims into {len(groups)} clusters")
        return groups
