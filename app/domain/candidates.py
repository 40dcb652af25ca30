"""Candidate pooling from similar readers."""

from collections.abc import Iterable, Set
from dataclasses import dataclass, field

from app.domain.similarity import PeerScore


@dataclass
class Candidate:
    """An unread book accumulating weight from the peers who read it."""

    weighted_score: float = 0.0
    contributing_peers: list[str] = field(default_factory=list)

    def add(self, peer: PeerScore) -> None:
        self.weighted_score += peer.score
        self.contributing_peers.append(peer.reader_id)


def aggregate_candidates(
    peers: Iterable[PeerScore],
    exclude: Set[str],
) -> dict[str, Candidate]:
    """
    Pool every book the peers read that is not in ``exclude``.

    A candidate's weight is the sum of the similarity scores of the peers
    who read it, so a book shared by several close peers outranks one
    seen by a single peer. Contributors are listed in peer order.
    """
    candidates: dict[str, Candidate] = {}
    for peer in peers:
        for book_id in peer.books:
            if book_id in exclude:
                continue
            candidates.setdefault(book_id, Candidate()).add(peer)
    return candidates
