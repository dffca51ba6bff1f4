from .common import ConfigurationMismatch, ZeroPolynomial
from .monomials import MonomialTrie
from .polynomials import Polynomial, subtract_multiple

class Basis:
    """An append-only list of nonzero polynomials indexed by leading monomial.

    Reduction against a ``Basis`` always picks the lowest-indexed element
    whose leading monomial divides, so ``normal_form`` agrees with the
    remainder of ``PolynomialRing.divide`` for the same divisor order.
    """

    def __init__(self, ring, polys=()):
        self.ring = ring
        self.polys = []
        self.leads = []
        self.trie = MonomialTrie()
        for poly in polys:
            self.append(poly)

    def __getitem__(self, index):
        return self.polys[index]

    def __iter__(self):
        return iter(self.polys)

    def __len__(self):
        return len(self.polys)

    def append(self, poly):
        if poly.ring != self.ring:
            raise ConfigurationMismatch(f"{poly.ring!r} and {self.ring!r}")
        if not poly:
            raise ZeroPolynomial("cannot add the zero polynomial to a basis")
        lm = poly.lm()
        self.trie.insert(lm.exps, len(self.polys))
        self.polys.append(poly)
        self.leads.append(lm)
        return len(self.polys) - 1

    def covered(self, m):
        return self.trie.find(m.exps) >= 0

    def find_index(self, m):
        return self.trie.find(m.exps)

    def find(self, m):
        index = self.trie.find(m.exps)
        if index >= 0:
            return self.polys[index]

    def rem_of(self, f):
        K = self.ring.require_field()
        order = self.ring.order
        remainder = {}
        work = dict(f.terms)
        while work:
            mono_p = order.max(work)
            coeff_p = work[mono_p]
            if (g := self.find(mono_p)) is not None:
                mono_q = mono_p / g.lm()
                coeff_q = K.div(coeff_p, g.lc())
                subtract_multiple(K, work, g, coeff_q, mono_q)
            else:
                remainder[mono_p] = coeff_p
                del work[mono_p]
        return Polynomial(self.ring, remainder, False)

def s_polynomial(f, g):
    """(L / LT(f)) * f - (L / LT(g)) * g with L = lcm(LM(f), LM(g))."""
    if f.ring != g.ring:
        raise ConfigurationMismatch(f"{f.ring!r} and {g.ring!r}")
    K = f.ring.require_field()
    lcm_m = f.lm().lcm(g.lm())
    mono_f = lcm_m / f.lm()
    mono_g = lcm_m / g.lm()
    return (f.mul_term(K.inv(f.lc()), mono_f) -
            g.mul_term(K.inv(g.lc()), mono_g))

def normal_form(p, basis):
    """Remainder of ``p`` on division by ``basis`` (a sequence or ``Basis``)."""
    if not isinstance(basis, Basis):
        basis = Basis(p.ring, [g for g in basis if g])
    elif p.ring != basis.ring:
        raise ConfigurationMismatch(f"{p.ring!r} and {basis.ring!r}")
    return basis.rem_of(p)

def product_criterion(lead_i, lead_j):
    """Buchberger's first criterion: coprime leading monomials."""
    return lead_i.is_coprime(lead_j)

def chain_criterion(i, j, leads, pending):
    """Buchberger's second criterion.

    ``(i, j)`` can be skipped when some other element's leading monomial
    divides ``lcm(lead_i, lead_j)`` and neither ``(i, k)`` nor ``(j, k)``
    is still waiting in ``pending``.
    """
    lcm_ij = leads[i].lcm(leads[j])
    for k, lead_k in enumerate(leads):
        if k == i or k == j:
            continue
        if not lead_k.divides(lcm_ij):
            continue
        if pair_key(i, k) in pending or pair_key(j, k) in pending:
            continue
        return True
    return False

def pair_key(i, j):
    return (i, j) if i < j else (j, i)
