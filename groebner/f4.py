"""F4: Buchberger's algorithm with the pair reductions of one degree done
together as sparse row elimination over the coefficient field."""
import logging

from .basis import (EngineStats, check_generators, minimize, interreduce)
from .common import Cancelled
from .options import EngineOptions
from .pairs import CriticalPair, PairQueue
from .polynomials import Polynomial
from .reduction import Basis, product_criterion, chain_criterion

logger = logging.getLogger(__name__)

class MonomialTable:
    def __init__(self, order, monomials):
        self._from_idx = order.sorted(monomials, reverse=True)
        self._to_idx = {m: i for i, m in enumerate(self._from_idx)}
    def get_index(self, mono): return self._to_idx[mono]
    def get_monomial(self, idx): return self._from_idx[idx]
    def __len__(self): return len(self._from_idx)

def collect_pair_rows(pairs, G):
    """Rows for a batch of critical pairs plus the reducers found by
    symbolic preprocessing.

    Returns the reducer rows, the pair rows (both as term dicts), the set
    of leading monomials already covered by ``G`` or the pairs, and every
    monomial that occurs.
    """
    K = G.ring.field
    pair_rows = []
    reducer_rows = []
    leads = set()
    mono_set = set()
    for pair in pairs:
        for index in (pair.i, pair.j):
            g = G[index]
            row = g.mul_term(K.inv(g.lc()), pair.lcm / g.lm())
            pair_rows.append(row.terms)
            mono_set.update(row.terms)
        leads.add(pair.lcm)
    done = set(leads)
    todo = mono_set - done
    while todo:
        m = todo.pop()
        done.add(m)
        k = G.find_index(m)
        if k >= 0:
            g = G[k]
            h = g.mul_term(K.inv(g.lc()), m / g.lm())
            reducer_rows.append(h.terms)
            leads.add(m)
            for _m in h.terms:
                if _m not in done:
                    todo.add(_m)
                mono_set.add(_m)
    return reducer_rows, pair_rows, leads, mono_set

def subtract_row(K, r, pivot, factor):
    for cidx, pcoeff in pivot.items():
        c = K.sub(r.get(cidx, K.zero()), K.mul(factor, pcoeff))
        if K.is_zero(c):
            r.pop(cidx, None)
        else:
            r[cidx] = c

def sparse_eliminate(K, rows):
    """Reduced row echelon form of sparse rows ``{col: coeff}``.

    Column 0 is the largest monomial, so a row's pivot is its smallest
    column index. Every returned row is monic, has a distinct pivot, and
    has zeros in the pivot columns of the other rows. Rows that reduce to
    zero are dropped.
    """
    pivot_for_col = {}
    for row in rows:
        r = dict(row)
        while r:
            left = min(r)
            if left not in pivot_for_col:
                inv = K.inv(r[left])
                pivot_for_col[left] = {c: K.mul(v, inv) for c, v in r.items()}
                break
            subtract_row(K, r, pivot_for_col[left], r[left])
    # Back substitution, last pivot first. A row with a later pivot is
    # already clear of other pivots, so one pass over each row suffices.
    for col in sorted(pivot_for_col, reverse=True):
        r = pivot_for_col[col]
        for cidx in sorted(c for c in r if c != col and c in pivot_for_col):
            subtract_row(K, r, pivot_for_col[cidx], r[cidx])
    return list(pivot_for_col.values())

def rows_to_polys(ring, reduced_rows, table):
    polys = []
    for r in reduced_rows:
        terms = {table.get_monomial(idx): coeff for idx, coeff in r.items()}
        polys.append(Polynomial(ring, terms, False))
    return polys

def f4(ring, generators, options=None):
    options = options or EngineOptions()
    generators = check_generators(ring, generators)
    K = ring.field
    stats = EngineStats()
    G = Basis(ring)
    queue = PairQueue(ring.order, "degree")

    def add(poly):
        index = G.append(poly)
        lead = G.leads[index]
        for k in range(index):
            stats.pairs_created += 1
            if options.product_criterion and product_criterion(G.leads[k], lead):
                stats.product_skips += 1
                continue
            queue.push(CriticalPair(k, index, G.leads[k].lcm(lead)))

    for g in generators:
        add(g.monic())

    limit = options.max_pairs
    while queue:
        if options.cancelled:
            raise Cancelled(f"cancelled with {len(queue)} pairs pending")
        deg = queue.heap[0][2].degree
        batch = []
        while queue and queue.heap[0][2].degree == deg:
            pair = queue.pop()
            if (options.chain_criterion and
                    chain_criterion(pair.i, pair.j, G.leads, queue.pending)):
                stats.chain_skips += 1
                continue
            if limit is not None and stats.pairs_processed + len(batch) >= limit:
                raise Cancelled(f"gave up after {limit} pairs")
            batch.append(pair)
        if not batch:
            continue
        stats.pairs_processed += len(batch)
        reducer_rows, pair_rows, leads, monos = collect_pair_rows(batch, G)
        table = MonomialTable(ring.order, monos)
        # reducers first, so they own the pivots of the monomials G covers
        indexed_rows = [{table.get_index(m): c for m, c in row.items()}
                        for row in reducer_rows + pair_rows]
        reduced = sparse_eliminate(K, indexed_rows)
        stats.zero_reductions += len(indexed_rows) - len(reduced)
        found = 0
        for p in rows_to_polys(ring, reduced, table):
            if p.lm() not in leads:
                add(p)
                found += 1
        logger.debug("degree %d batch: %d pairs, %d rows, %d new elements",
                     deg, len(batch), len(indexed_rows), found)

    result = interreduce(minimize(G))
    stats.basis_size = len(result)
    logger.info("f4 basis of %d generators in %r: %d elements, %s",
                len(generators), ring, len(result), stats.as_dict())
    return result
