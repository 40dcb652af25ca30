"""Unit tests for Jaccard similarity and peer scoring."""

import pytest

from app.domain.similarity import PeerScore, jaccard, score_peers

# ── Jaccard ────────────────────────────────────────


def test_identical_sets_score_one():
    books = {"B001", "B002", "B003"}
    assert jaccard(books, set(books)) == 1.0


def test_two_empty_sets_score_zero():
    assert jaccard(set(), set()) == 0.0


def test_one_empty_set_scores_zero():
    assert jaccard({"B001"}, set()) == 0.0


def test_disjoint_sets_score_zero():
    assert jaccard({"B001", "B002"}, {"B003"}) == 0.0


def test_partial_overlap():
    # |{B1,B2}| / |{B1,B2,B3,B4}|
    assert jaccard({"B1", "B2", "B3"}, {"B1", "B2", "B4"}) == pytest.approx(0.5)


@pytest.mark.parametrize(
    "a, b",
    [
        ({"B1"}, {"B1", "B2", "B3", "B4"}),
        ({"B1", "B2", "B3"}, {"B3", "B9"}),
        (set(), {"B7"}),
    ],
)
def test_symmetric_and_bounded(a, b):
    forward = jaccard(a, b)
    assert forward == jaccard(b, a)
    assert 0.0 <= forward <= 1.0


def test_accepts_frozensets():
    assert jaccard(frozenset({"B1"}), {"B1", "B2"}) == pytest.approx(0.5)


# ── Peer scoring ───────────────────────────────────


def test_score_peers_filters_and_sorts():
    target = {"B1", "B2", "B3"}
    peers = {
        "U002": {"B1", "B2", "B4"},  # 0.5
        "U003": {"B5"},  # 0.0
        "U004": {"B1", "B2", "B3"},  # 1.0
        "U005": {"B3", "B6", "B7", "B8", "B9"},  # 1/7
    }

    scored = score_peers(target, peers, min_score=0.1)

    assert [peer.reader_id for peer in scored] == ["U004", "U002", "U005"]
    assert scored[0].score == 1.0
    assert scored[1].score == pytest.approx(0.5)
    assert scored[2].score == pytest.approx(1 / 7)
    assert all(peer.score >= 0.1 for peer in scored)


def test_score_peers_threshold_is_inclusive():
    scored = score_peers({"B1", "B2", "B3"}, {"U002": {"B1", "B2", "B4"}}, min_score=0.5)
    assert [peer.reader_id for peer in scored] == ["U002"]


def test_score_peers_default_threshold_excludes_weak_matches():
    # 1/11 < 0.1
    target = {f"B{i}" for i in range(1, 11)}
    assert score_peers(target, {"U002": {"B1", "B99"}}) == []


def test_score_peers_keeps_input_order_on_ties():
    target = {"B1", "B2"}
    peers = {"U009": {"B1"}, "U002": {"B2"}, "U005": {"B1"}}

    scored = score_peers(target, peers)

    assert [peer.reader_id for peer in scored] == ["U009", "U002", "U005"]


def test_score_peers_carries_peer_books():
    scored = score_peers({"B1"}, {"U002": {"B1", "B2"}})
    assert scored == [PeerScore("U002", 0.5, frozenset({"B1", "B2"}))]


def test_score_peers_no_peers():
    assert score_peers({"B1"}, {}) == []
