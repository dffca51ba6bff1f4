"""Buchberger's algorithm and ideal membership.

The engine walks through ``State.INITIALIZING -> PROCESSING_PAIRS ->
MINIMIZING -> REDUCING -> DONE``. Its output is always the reduced
Gröbner basis: monic, sorted by ascending leading monomial, and unique
for a given ideal and monomial order.
"""
from dataclasses import dataclass, asdict
from enum import Enum
import logging

from .common import ConfigurationMismatch, Cancelled
from .options import EngineOptions
from .pairs import CriticalPair, PairQueue
from .polynomials import Polynomial
from .reduction import (Basis, s_polynomial, normal_form,
                        product_criterion, chain_criterion)

logger = logging.getLogger(__name__)

class State(Enum):
    INITIALIZING     = "initializing"
    PROCESSING_PAIRS = "processing pairs"
    MINIMIZING       = "minimizing"
    REDUCING         = "reducing"
    DONE             = "done"

@dataclass
class EngineStats:
    pairs_created   : int = 0
    pairs_processed : int = 0
    product_skips   : int = 0
    chain_skips     : int = 0
    zero_reductions : int = 0
    basis_size      : int = 0

    def as_dict(self):
        return asdict(self)

def check_generators(ring, generators):
    """Validate generators against ``ring``; returns the nonzero ones."""
    generators = list(generators)
    for g in generators:
        if not isinstance(g, Polynomial):
            raise TypeError(f"expected a Polynomial, got {type(g).__name__}")
        if g.ring != ring:
            raise ConfigurationMismatch(f"generator from {g.ring!r} given to {ring!r}")
    ring.require_field()
    return [g for g in generators if g]

class GroebnerEngine:
    def __init__(self, ring, generators, options=None):
        self.ring = ring
        self.options = options or EngineOptions()
        self.generators = check_generators(ring, generators)
        self.state = State.INITIALIZING
        self.stats = EngineStats()
        self.basis = None
        self.queue = None
        self.result = None

    @property
    def pending(self):
        return len(self.queue) if self.queue is not None else 0

    def run(self):
        if self.state is State.DONE:
            return list(self.result)
        self.initialize()
        self.process_pairs()
        self.state = State.MINIMIZING
        minimal = minimize(self.basis)
        self.state = State.REDUCING
        self.result = interreduce(minimal)
        self.stats.basis_size = len(self.result)
        self.state = State.DONE
        logger.info("groebner basis of %d generators in %r: %d elements, %s",
                    len(self.generators), self.ring, len(self.result),
                    self.stats.as_dict())
        return list(self.result)

    def initialize(self):
        self.stats = EngineStats()
        self.basis = Basis(self.ring)
        self.queue = PairQueue(self.ring.order, self.options.selection)
        for g in self.generators:
            self.add(g.monic())
        self.state = State.PROCESSING_PAIRS

    def add(self, poly):
        index = self.basis.append(poly)
        lead = self.basis.leads[index]
        for k in range(index):
            lead_k = self.basis.leads[k]
            self.stats.pairs_created += 1
            if self.options.product_criterion and product_criterion(lead_k, lead):
                self.stats.product_skips += 1
                continue
            self.queue.push(CriticalPair(k, index, lead_k.lcm(lead)))
        return index

    def check_cancel(self):
        if self.options.cancelled:
            raise Cancelled(f"cancelled with {self.pending} pairs pending")
        limit = self.options.max_pairs
        if limit is not None and self.stats.pairs_processed >= limit:
            raise Cancelled(f"gave up after {limit} pairs")

    def process_pairs(self):
        leads = self.basis.leads
        while self.queue:
            self.check_cancel()
            pair = self.queue.pop()
            if (self.options.chain_criterion and
                    chain_criterion(pair.i, pair.j, leads, self.queue.pending)):
                self.stats.chain_skips += 1
                logger.debug("pair %s skipped by chain criterion", pair.key)
                continue
            self.stats.pairs_processed += 1
            s = s_polynomial(self.basis[pair.i], self.basis[pair.j])
            r = self.basis.rem_of(s)
            if r:
                index = self.add(r.monic())
                logger.debug("pair %s gave element %d with leading monomial %s",
                             pair.key, index, r.lm().exps)
            else:
                self.stats.zero_reductions += 1

def minimize(polys):
    """Drop elements whose leading monomial is a multiple of another's,
    and make the survivors monic."""
    polys = [g for g in polys if g]
    if not polys:
        return []
    order = polys[0].ring.order
    kept = []
    for g in sorted(polys, key=lambda g: order.key(g.lm())):
        lm = g.lm()
        if not any(h.lm().divides(lm) for h in kept):
            kept.append(g.monic())
    return kept

def interreduce(polys):
    """Reduce every element of a minimal basis against the others."""
    reduced = []
    for i, g in enumerate(polys):
        others = polys[:i] + polys[i+1:]
        reduced.append(normal_form(g, others).monic())
    if reduced:
        order = reduced[0].ring.order
        reduced.sort(key=lambda g: order.key(g.lm()))
    return reduced

def compute_groebner_basis(ring, generators, options=None):
    """Reduced Gröbner basis of the ideal generated by ``generators``."""
    options = options or EngineOptions()
    if options.algorithm == "f4":
        from .f4 import f4
        return f4(ring, generators, options)
    return GroebnerEngine(ring, generators, options).run()

def groebner_basis(generators, options=None):
    generators = list(generators)
    if not generators:
        raise ValueError("cannot infer the ring of an empty generator list")
    return compute_groebner_basis(generators[0].ring, generators, options)

def is_in_ideal(basis, candidate):
    """Membership test; ``basis`` must already be a Gröbner basis."""
    if not candidate:
        return True
    return not normal_form(candidate, basis)

def is_groebner_basis(polys):
    """Buchberger's criterion: every S-polynomial reduces to zero."""
    polys = [g for g in polys if g]
    if not polys:
        return True
    basis = Basis(polys[0].ring, polys)
    for i in range(len(polys)):
        for j in range(i):
            if product_criterion(polys[i].lm(), polys[j].lm()):
                continue
            if basis.rem_of(s_polynomial(polys[i], polys[j])):
                return False
    return True

class Ideal:
    """An ideal given by generators, with its reduced basis computed lazily."""

    def __init__(self, generators, ring=None, options=None):
        generators = list(generators)
        if ring is None:
            if not generators:
                raise ValueError("an ideal without generators needs an explicit ring")
            ring = generators[0].ring
        self.ring = ring
        self.generators = tuple(ring.coerce(g) for g in generators)
        self.options = options
        self._basis = None
        check_generators(ring, self.generators)

    def groebner_basis(self):
        if self._basis is None:
            self._basis = compute_groebner_basis(self.ring, self.generators, self.options)
        return list(self._basis)

    def reduce(self, p):
        return normal_form(self.ring.coerce(p), self.groebner_basis())

    def __contains__(self, p):
        return is_in_ideal(self.groebner_basis(), self.ring.coerce(p))

    def contains(self, other):
        return all(g in self for g in other.generators)

    def _check(self, other):
        if self.ring != other.ring:
            raise ConfigurationMismatch(f"{self.ring!r} and {other.ring!r}")

    def __add__(self, other):
        self._check(other)
        return Ideal(self.generators + other.generators, self.ring, self.options)

    def __mul__(self, other):
        self._check(other)
        return Ideal([f * g for f in self.generators for g in other.generators],
                     self.ring, self.options)

    def __eq__(self, other):
        if not isinstance(other, Ideal):
            return NotImplemented
        return self.ring == other.ring and self.groebner_basis() == other.groebner_basis()

    __hash__ = None

    def is_zero(self):
        return not self.groebner_basis()

    def is_unit_ideal(self):
        return self.groebner_basis() == [self.ring.one()]

    def __repr__(self):
        return f"Ideal({', '.join(map(str, self.generators))}) of {self.ring!r}"
