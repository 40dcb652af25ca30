"""Set similarity between readers' borrowing histories.

Jaccard(A, B) = |A ∩ B| / |A ∪ B|, ranging from 0.0 (no overlap) to 1.0
(identical histories). Two empty histories are treated as non-matching.
"""

import logging
from collections.abc import Mapping, Set
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MIN_SIMILARITY = 0.1


def jaccard(set_a: Set[str], set_b: Set[str]) -> float:
    """Jaccard similarity of two sets of identifiers."""
    if not set_a and not set_b:
        return 0.0

    smaller, larger = (set_a, set_b) if len(set_a) <= len(set_b) else (set_b, set_a)
    intersection = sum(1 for item in smaller if item in larger)
    union = len(set_a) + len(set_b) - intersection
    return intersection / union


@dataclass(frozen=True)
class PeerScore:
    """A peer reader scored against the target reader."""

    reader_id: str
    score: float
    books: frozenset[str]


def score_peers(
    target_books: Set[str],
    peer_books: Mapping[str, Set[str]],
    min_score: float = MIN_SIMILARITY,
) -> list[PeerScore]:
    """
    Score every peer against the target's read-set.

    Returns peers with ``score >= min_score`` sorted by descending score.
    The sort is stable, so equal scores keep the mapping's iteration order.
    """
    scored: list[PeerScore] = []
    for reader_id, books in peer_books.items():
        score = jaccard(target_books, books)
        logger.debug("Peer %s scored %.4f", reader_id, score)
        if score >= min_score:
            scored.append(PeerScore(reader_id, score, frozenset(books)))

    scored.sort(key=lambda peer: peer.score, reverse=True)
    return scored
