import pytest

from groebner.monomials import Monomial, lex, grevlex
from groebner.pairs import CriticalPair, PairQueue

def drain(queue):
    out = []
    while queue:
        out.append(queue.pop().key)
    return out

def test_critical_pair_normalises_indices():
    pair = CriticalPair(3, 1, Monomial((1, 1)))
    assert (pair.i, pair.j) == (1, 3)
    assert pair.key == (1, 3)
    assert pair.degree == 2
    assert pair == CriticalPair(1, 3, Monomial((2, 2)))

def test_critical_pair_needs_distinct_indices():
    with pytest.raises(ValueError):
        CriticalPair(2, 2, Monomial((1, 0)))

def test_lowest_degree_first_then_order_then_indices():
    queue = PairQueue(grevlex)
    xx, xy, x = Monomial((2, 0)), Monomial((1, 1)), Monomial((1, 0))
    queue.push(CriticalPair(0, 2, xx))
    queue.push(CriticalPair(2, 4, xy))
    queue.push(CriticalPair(3, 1, xy))
    queue.push(CriticalPair(0, 3, xy))
    queue.push(CriticalPair(0, 1, x))
    assert len(queue) == 5
    assert drain(queue) == [(0, 1), (0, 3), (1, 3), (2, 4), (0, 2)]

@pytest.mark.parametrize("order, expected", [
    (grevlex, [(0, 1), (2, 3)]),
    (lex, [(2, 3), (0, 1)]),
])
def test_ties_in_degree_follow_the_term_order(order, expected):
    queue = PairQueue(order)
    # x*z**2 < y**3 under grevlex, the reverse under lex
    queue.push(CriticalPair(0, 1, Monomial((1, 0, 2))))
    queue.push(CriticalPair(2, 3, Monomial((0, 3, 0))))
    assert drain(queue) == expected

def test_fifo_keeps_insertion_order():
    queue = PairQueue(grevlex, "fifo")
    queue.push(CriticalPair(0, 2, Monomial((3, 0))))
    queue.push(CriticalPair(1, 2, Monomial((1, 0))))
    queue.push(CriticalPair(0, 1, Monomial((2, 0))))
    assert drain(queue) == [(0, 2), (1, 2), (0, 1)]

def test_duplicate_push_is_ignored():
    queue = PairQueue(grevlex)
    assert queue.push(CriticalPair(0, 3, Monomial((1, 1))))
    assert not queue.push(CriticalPair(3, 0, Monomial((1, 1))))
    assert len(queue) == 1

def test_pending_tracks_pops():
    queue = PairQueue(grevlex)
    queue.push(CriticalPair(0, 1, Monomial((1, 0))))
    queue.push(CriticalPair(1, 2, Monomial((2, 0))))
    assert queue.pending == {(0, 1), (1, 2)}
    assert (1, 0) in queue
    assert queue.pop().key == (0, 1)
    assert queue.pending == {(1, 2)}
    assert (0, 1) not in queue
    # a popped pair can be queued again
    assert queue.push(CriticalPair(0, 1, Monomial((1, 0))))
    queue.pop()
    queue.pop()
    assert not queue
    assert queue.pending == set()
