from dataclasses import dataclass, field
from typing import Tuple
import bisect
import numpy as np

from .common import NotDivisible, DimensionMismatch, first

class Monomial:
    """A power product over a fixed number of indeterminates."""
    __slots__ = ("exps",)

    def __init__(self, exps):
        self.exps = tuple(int(e) for e in exps)
        if any(e < 0 for e in self.exps):
            raise ValueError(f"negative exponent in {self.exps}")

    @classmethod
    def one(cls, n):
        return cls((0,) * n)

    @classmethod
    def variable(cls, i, n):
        return cls(1 if k == i else 0 for k in range(n))

    def __len__(self):
        return len(self.exps)

    def __iter__(self):
        return iter(self.exps)

    def __getitem__(self, index):
        return self.exps[index]

    def __hash__(self):
        return hash(self.exps)

    def __eq__(self, other):
        if isinstance(other, Monomial):
            return self.exps == other.exps
        return NotImplemented

    @property
    def degree(self):
        return sum(self.exps)

    def common(self, other):
        if len(self.exps) != len(other.exps):
            raise DimensionMismatch(
                f"monomials of length {len(self.exps)} and {len(other.exps)}")
        return zip(self.exps, other.exps)

    def __mul__(self, other):
        return Monomial(ei + ej for ei, ej in self.common(other))

    def __pow__(self, n):
        return Monomial(e * n for e in self.exps)

    def divides(self, other):
        return all(ei <= ej for ei, ej in self.common(other))

    def quotient(self, other):
        if not other.divides(self):
            raise NotDivisible(f"{other!r} does not divide {self!r}")
        return Monomial(ei - ej for ei, ej in self.common(other))

    __truediv__ = quotient

    def lcm(self, other):
        return Monomial(max(ei, ej) for ei, ej in self.common(other))

    def gcd(self, other):
        return Monomial(min(ei, ej) for ei, ej in self.common(other))

    def is_coprime(self, other):
        return all(ei == 0 or ej == 0 for ei, ej in self.common(other))

    def is_one(self):
        return not any(self.exps)

    def pretty(self, names):
        return "*".join(f"{x}**{e}" if e > 1 else x
                        for x, e in zip(names, self.exps) if e > 0)

    def __repr__(self):
        return f"Monomial({self.exps})"

class MonomialOrder:
    """A total, multiplicative, well-founded order on exponent vectors.

    Subclasses only provide ``key``: a tuple of ints whose natural
    ordering is the term order.
    """
    name = None

    def key(self, m):
        raise NotImplementedError

    def compare(self, a, b):
        ka, kb = self.key(a), self.key(b)
        return (ka > kb) - (ka < kb)

    def lt(self, a, b):
        return self.key(a) < self.key(b)

    def max(self, monomials):
        return max(monomials, key=self.key)

    def sorted(self, monomials, reverse=False):
        return sorted(monomials, key=self.key, reverse=reverse)

    def matrix(self, n):
        raise NotImplementedError

    def __repr__(self):
        return self.name

@dataclass(frozen=True, repr=False)
class Lex(MonomialOrder):
    name = "lex"

    def key(self, m):
        return m.exps

    def matrix(self, n):
        return np.eye(n, dtype=np.int64)

@dataclass(frozen=True, repr=False)
class GradedLex(MonomialOrder):
    name = "grlex"

    def key(self, m):
        return (sum(m.exps),) + m.exps

    def matrix(self, n):
        return np.vstack([np.ones((1, n), dtype=np.int64),
                          np.eye(n, dtype=np.int64)[:-1]])

@dataclass(frozen=True, repr=False)
class GradedReverseLex(MonomialOrder):
    name = "grevlex"

    def key(self, m):
        return (sum(m.exps),) + tuple(-e for e in reversed(m.exps))

    def matrix(self, n):
        rows = [np.ones(n, dtype=np.int64)]
        for i in range(n - 1):
            row = np.zeros(n, dtype=np.int64)
            row[n - 1 - i] = -1
            rows.append(row)
        return np.array(rows, dtype=np.int64)

@dataclass(frozen=True, repr=False)
class MatrixOrder(MonomialOrder):
    """Order by the rows of an integer weight matrix, first row first."""
    rows : Tuple[Tuple[int, ...], ...]
    _matrix : np.ndarray = field(default=None, compare=False, hash=False)

    name = "matrix"

    def __init__(self, matrix):
        M = np.asarray(matrix, dtype=np.int64)
        if M.ndim != 2 or M.shape[0] != M.shape[1]:
            raise ValueError(f"weight matrix must be square, got shape {M.shape}")
        if M.shape[0] and np.linalg.matrix_rank(M) != M.shape[0]:
            raise ValueError("weight matrix is singular, order would not be total")
        for col in M.T:
            nonzero = col[col != 0]
            if nonzero.size and nonzero[0] < 0:
                raise ValueError("first nonzero weight of every column must be positive")
        object.__setattr__(self, "rows", tuple(tuple(int(v) for v in row) for row in M))
        object.__setattr__(self, "_matrix", M)

    def key(self, m):
        if len(m.exps) != self._matrix.shape[1]:
            raise DimensionMismatch(
                f"{m!r} has {len(m.exps)} entries, order expects {self._matrix.shape[1]}")
        return tuple(int(v) for v in self._matrix @ np.asarray(m.exps, dtype=np.int64))

    def matrix(self, n):
        return self._matrix.copy()

    def __repr__(self):
        return f"MatrixOrder({[list(row) for row in self.rows]})"

lex     = Lex()
grlex   = GradedLex()
grevlex = GradedReverseLex()

ORDERS = {order.name: order for order in (lex, grlex, grevlex)}

def get_order(order):
    if isinstance(order, MonomialOrder):
        return order
    try:
        return ORDERS[order]
    except KeyError:
        raise ValueError(f"unknown monomial order {order!r}, "
                         f"expected one of {sorted(ORDERS)}") from None

class MonomialTrie:
    """Divisibility index over exponent vectors.

    One level per indeterminate; each branch keeps the children sorted
    by exponent so a lookup only walks exponents that can divide.
    """
    __slots__ = ("children", "index")
    def __init__(self):
        self.index = -1
        self.children = []

    def insert(self, exps, index):
        node = self
        for exp in exps:
            for e, child in node.children:
                if e == exp:
                    node = child
                    break
            else:
                child = MonomialTrie()
                bisect.insort(node.children, (exp, child), key=first)
                node = child
        if node.index == -1 or index < node.index:
            node.index = index

    def find(self, exps):
        best = -1
        stack = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            if depth == len(exps):
                if node.index >= 0 and (best < 0 or node.index < best):
                    best = node.index
                continue
            for e, child in node.children:
                if e > exps[depth]:
                    break
                stack.append((child, depth + 1))
        return best
