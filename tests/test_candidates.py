"""Unit tests for candidate aggregation."""

import pytest

from app.domain.candidates import aggregate_candidates
from app.domain.similarity import PeerScore


def test_single_peer_contributes_unread_books():
    peers = [PeerScore("U002", 0.5, frozenset({"B1", "B2", "B4"}))]

    candidates = aggregate_candidates(peers, exclude={"B1", "B2", "B3"})

    assert set(candidates) == {"B4"}
    assert candidates["B4"].weighted_score == pytest.approx(0.5)
    assert candidates["B4"].contributing_peers == ["U002"]


def test_scores_accumulate_across_peers_in_peer_order():
    peers = [
        PeerScore("U004", 0.8, frozenset({"B7", "B8"})),
        PeerScore("U002", 0.5, frozenset({"B7"})),
        PeerScore("U009", 0.2, frozenset({"B7", "B9"})),
    ]

    candidates = aggregate_candidates(peers, exclude=set())

    assert candidates["B7"].weighted_score == pytest.approx(1.5)
    assert candidates["B7"].contributing_peers == ["U004", "U002", "U009"]
    assert candidates["B8"].contributing_peers == ["U004"]
    assert candidates["B9"].weighted_score == pytest.approx(0.2)


def test_excluded_books_never_appear():
    peers = [
        PeerScore("U002", 0.9, frozenset({"B1", "B2"})),
        PeerScore("U003", 0.3, frozenset({"B2", "B3"})),
    ]

    candidates = aggregate_candidates(peers, exclude={"B2"})

    assert "B2" not in candidates
    assert set(candidates) == {"B1", "B3"}


def test_weight_equals_sum_of_contributor_scores():
    peers = [
        PeerScore("U002", 0.25, frozenset({"B1", "B2"})),
        PeerScore("U003", 0.125, frozenset({"B1"})),
        PeerScore("U004", 0.5, frozenset({"B2", "B1"})),
    ]
    by_reader = {peer.reader_id: peer.score for peer in peers}

    for candidate in aggregate_candidates(peers, exclude=set()).values():
        expected = sum(by_reader[reader] for reader in candidate.contributing_peers)
        assert candidate.weighted_score == pytest.approx(expected)


def test_no_peers_no_candidates():
    assert aggregate_candidates([], exclude={"B1"}) == {}
