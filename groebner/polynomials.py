from fractions import Fraction
from math import gcd
from numbers import Number, Rational

from .common import (ConfigurationMismatch, ZeroPolynomial,
                     DimensionMismatch, CapabilityError)
from .fields import Rationals
from .monomials import Monomial, get_order
from .structures import (implements, require, satisfies, RingOps,
                         CommutativeRing, Field)

class Polynomial:
    """A sparse mapping from monomial to nonzero coefficient.

    Polynomials are values: every operation returns a new polynomial and
    ``terms`` is never mutated after construction.
    """
    __slots__ = ("ring", "terms", "_lm_cache")

    def __init__(self, ring, terms=None, prune=True):
        self.ring = ring
        if prune:
            K = ring.field
            self.terms = {}
            for m, c in (terms or {}).items():
                m = ring.monomial(m)
                c = K.convert(c)
                if m in self.terms:
                    c = K.add(self.terms.pop(m), c)
                if not K.is_zero(c):
                    self.terms[m] = c
        else:
            self.terms = {} if terms is None else terms
        self._lm_cache = None

    def _check(self, other):
        if self.ring != other.ring:
            raise ConfigurationMismatch(f"{self.ring!r} and {other.ring!r}")

    def _coerce(self, other):
        if isinstance(other, Polynomial):
            self._check(other)
            return other
        if isinstance(other, Number):
            return self.ring.constant(other)
        return NotImplemented

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        K = self.ring.field
        res = self.terms.copy()
        for m, c in other.terms.items():
            if m in res:
                s = K.add(res[m], c)
                if K.is_zero(s):
                    del res[m]
                else:
                    res[m] = s
            else:
                res[m] = c
        return Polynomial(self.ring, res, False)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        K = self.ring.field
        res = self.terms.copy()
        for m, c in other.terms.items():
            if m in res:
                s = K.sub(res[m], c)
                if K.is_zero(s):
                    del res[m]
                else:
                    res[m] = s
            else:
                res[m] = K.neg(c)
        return Polynomial(self.ring, res, False)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other - self

    def __neg__(self):
        K = self.ring.field
        return Polynomial(self.ring, {m: K.neg(c) for m, c in self.terms.items()}, False)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self.mul(other)

    __rmul__ = __mul__

    def __pow__(self, n):
        if not isinstance(n, int) or n < 0:
            raise ValueError(f"exponent must be a non-negative int, got {n!r}")
        result = self.ring.one()
        base = self
        while n:
            if n & 1:
                result = result.mul(base)
            base = base.mul(base)
            n >>= 1
        return result

    def mul_term(self, coeff, mono):
        """Multiply by the single term ``coeff * mono``."""
        K = self.ring.field
        if K.is_zero(coeff):
            return self.ring.zero()
        res_terms = {}
        for m, c in self.terms.items():
            p = K.mul(c, coeff)
            if not K.is_zero(p):
                res_terms[m * mono] = p
        return Polynomial(self.ring, res_terms, False)

    def scale(self, coeff):
        return self.mul_term(self.ring.field.convert(coeff), Monomial.one(self.ring.nvars))

    def mul(self, other):
        self._check(other)
        K = self.ring.field
        res_terms = {}
        for m1, c1 in self.terms.items():
            for m2, c2 in other.terms.items():
                mprod = m1 * m2
                if mprod in res_terms:
                    res_terms[mprod] = K.add(res_terms[mprod], K.mul(c1, c2))
                else:
                    res_terms[mprod] = K.mul(c1, c2)
        return Polynomial(self.ring, {m: c for m, c in res_terms.items()
                                      if not K.is_zero(c)}, False)

    def leading_monomial(self):
        if not self.terms:
            raise ZeroPolynomial("the zero polynomial has no leading monomial")
        if self._lm_cache is None:
            self._lm_cache = self.ring.order.max(self.terms)
        return self._lm_cache

    lm = leading_monomial

    def leading_coefficient(self):
        return self.terms[self.leading_monomial()]

    lc = leading_coefficient

    def leading_term(self):
        lm = self.leading_monomial()
        return Polynomial(self.ring, {lm: self.terms[lm]}, False)

    lt = leading_term

    def monic(self):
        K = require(self.ring.field, Field)
        if not self.terms:
            return self
        lc = self.lc()
        if K.eq(lc, K.one()):
            return self
        inv = K.inv(lc)
        return Polynomial(self.ring, {m: K.mul(c, inv) for m, c in self.terms.items()}, False)

    def primitive(self):
        """Integer-coefficient multiple with coprime coefficients and a
        positive leading coefficient (rational coefficients only)."""
        if not self.terms:
            return self
        if not isinstance(self.ring.field, Rationals):
            raise CapabilityError(f"primitive() needs rational coefficients, not {self.ring.field!r}")
        coeffs = list(self.terms.values())
        # GCD of all numerators, LCM of all denominators
        num_gcd = abs(coeffs[0].numerator)
        den_lcm = abs(coeffs[0].denominator)
        for c in coeffs[1:]:
            num_gcd = gcd(num_gcd, abs(c.numerator))
            den_lcm = den_lcm * c.denominator // gcd(den_lcm, c.denominator)
        factor = Fraction(num_gcd, den_lcm)
        if self.lc() < 0:
            factor = -factor
        return Polynomial(self.ring, {m: c / factor for m, c in self.terms.items()}, False)

    @property
    def degree(self):
        if not self.terms:
            return -1
        return max(m.degree for m in self.terms)

    def monomials(self):
        return self.ring.order.sorted(self.terms, reverse=True)

    def coefficient(self, exps):
        m = self.ring.monomial(exps)
        return self.terms.get(m, self.ring.field.zero())

    def is_constant(self):
        return all(m.is_one() for m in self.terms)

    def evaluate(self, point):
        K = self.ring.field
        if len(point) != self.ring.nvars:
            raise DimensionMismatch(
                f"point has {len(point)} coordinates, ring has {self.ring.nvars} variables")
        point = [K.convert(v) for v in point]
        total = K.zero()
        for m, c in self.terms.items():
            term = c
            for v, e in zip(point, m.exps):
                if e:
                    term = K.mul(term, K.pow(v, e))
            total = K.add(total, term)
        return total

    def substitute(self, env):
        """Replace variables (by index or name) with polynomials of the same ring."""
        ring = self.ring
        env = {ring.index(var): ring.coerce(value) for var, value in env.items()}
        poly = ring.zero()
        for m, coeff in self.terms.items():
            x = ring.constant(coeff)
            exps = []
            for var, exp in enumerate(m.exps):
                if exp and var in env:
                    x = x.mul(env[var] ** exp)
                    exps.append(0)
                else:
                    exps.append(exp)
            poly = poly + x.mul_term(ring.field.one(), Monomial(exps))
        return poly

    def __bool__(self):
        return bool(self.terms)

    def __eq__(self, other):
        if isinstance(other, Polynomial):
            return self.ring == other.ring and self.terms == other.terms
        if isinstance(other, Rational):
            # equal only to numbers already in canonical form
            try:
                c = self.ring.field.convert(other)
            except (TypeError, ZeroDivisionError):
                return False
            return c == other and self.terms == self.ring.constant(c).terms
        return NotImplemented

    def __hash__(self):
        if self.is_constant():
            return hash(self.terms.get(Monomial.one(self.ring.nvars), 0))
        return hash(frozenset(self.terms.items()))

    def __str__(self):
        if not self.terms:
            return "0"
        K = self.ring.field
        names = self.ring.names
        out = []
        for m in self.monomials():
            coeff = self.terms[m]
            negative = isinstance(coeff, (int, Fraction)) and coeff < 0
            if negative:
                coeff = -coeff
            mono = m.pretty(names)
            if not mono:
                body = str(coeff)
            elif K.eq(coeff, K.one()):
                body = mono
            elif isinstance(coeff, Fraction) and coeff.denominator != 1:
                body = f"({coeff})*{mono}"
            else:
                body = f"{coeff}*{mono}"
            if not out:
                out.append(f"-{body}" if negative else body)
            else:
                out.append(f"- {body}" if negative else f"+ {body}")
        return " ".join(out)

    def __repr__(self):
        return f"Polynomial({self})"

@implements(CommutativeRing)
class PolynomialRing(RingOps):
    """K[x_1, ..., x_n] under a fixed monomial order.

    The ring is a plain configuration value; two rings built from equal
    coefficient structures, variable counts and orders are the same ring.
    """

    def __init__(self, field, nvars, order="grevlex", names=None):
        require(field, CommutativeRing)
        if nvars < 1:
            raise ValueError(f"need at least one indeterminate, got {nvars}")
        if names is None:
            names = default_names(nvars)
        elif isinstance(names, str):
            names = names.replace(",", " ").split()
        names = tuple(names)
        if len(names) != nvars:
            raise DimensionMismatch(f"{len(names)} names for {nvars} indeterminates")
        self.field = field
        self.nvars = nvars
        self.order = get_order(order)
        self.names = names

    def __eq__(self, other):
        if not isinstance(other, PolynomialRing):
            return NotImplemented
        return (self is other or
                (self.field == other.field and
                 self.nvars == other.nvars and
                 self.order == other.order))

    def __hash__(self):
        return hash((self.field, self.nvars, self.order))

    def __repr__(self):
        return f"{self.field!r}[{', '.join(self.names)}] ({self.order!r})"

    @property
    def is_field_coefficients(self):
        return satisfies(self.field, Field)

    def require_field(self):
        if not self.is_field_coefficients:
            raise CapabilityError(f"{self!r}: coefficients in {self.field!r} do not form a field")
        return self.field

    # Construction

    def monomial(self, exps):
        if isinstance(exps, Monomial):
            m = exps
        else:
            m = Monomial(exps)
        if len(m) != self.nvars:
            raise DimensionMismatch(
                f"exponent vector {m.exps} has length {len(m)}, ring has {self.nvars} variables")
        return m

    def polynomial(self, terms=None):
        return Polynomial(self, terms)

    __call__ = polynomial

    def constant(self, c):
        c = self.field.convert(c)
        if self.field.is_zero(c):
            return self.zero()
        return Polynomial(self, {Monomial.one(self.nvars): c}, False)

    def index(self, var):
        if isinstance(var, str):
            try:
                return self.names.index(var)
            except ValueError:
                raise KeyError(f"no variable named {var!r} in {self!r}") from None
        if not 0 <= var < self.nvars:
            raise DimensionMismatch(f"variable index {var} out of range for {self!r}")
        return var

    def variable(self, var):
        i = self.index(var)
        return Polynomial(self, {Monomial.variable(i, self.nvars): self.field.one()}, False)

    def gens(self):
        return tuple(self.variable(i) for i in range(self.nvars))

    def coerce(self, value):
        if isinstance(value, Polynomial):
            if value.ring != self:
                raise ConfigurationMismatch(f"{value.ring!r} and {self!r}")
            return value
        return self.constant(value)

    # CommutativeRing operations

    def convert(self, value):
        return self.coerce(value)

    def zero(self):
        return Polynomial(self, {}, False)

    def one(self):
        return self.constant(self.field.one())

    def is_zero(self, a):
        return not a

    def eq(self, a, b):
        return a == b

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return a.mul(b)

    # Division

    def divide(self, p, divisors):
        """Multivariate division of ``p`` by the ordered ``divisors``.

        Returns ``(quotients, remainder)`` with
        ``p == sum(q * g for q, g in zip(quotients, divisors)) + remainder``.
        The first divisor whose leading monomial divides the current
        leading monomial is always used.
        """
        K = self.require_field()
        p = self.coerce(p)
        divisors = list(divisors)
        leads = []
        for g in divisors:
            self.coerce(g)
            leads.append((g.lm(), g.lc()))
        quotients = [{} for _ in divisors]
        remainder = {}
        work = dict(p.terms)
        while work:
            mono_p = self.order.max(work)
            coeff_p = work[mono_p]
            for i, (mono_g, coeff_g) in enumerate(leads):
                if mono_g.divides(mono_p):
                    mono_q = mono_p / mono_g
                    coeff_q = K.div(coeff_p, coeff_g)
                    quotients[i][mono_q] = coeff_q
                    subtract_multiple(K, work, divisors[i], coeff_q, mono_q)
                    break
            else:
                remainder[mono_p] = coeff_p
                del work[mono_p]
        return ([Polynomial(self, q, False) for q in quotients],
                Polynomial(self, remainder, False))

def subtract_multiple(K, work, g, coeff, mono):
    """work -= coeff * mono * g, in place, dropping cancelled terms."""
    for m, c in g.terms.items():
        m = m * mono
        c = K.mul(c, coeff)
        if m in work:
            s = K.sub(work[m], c)
            if K.is_zero(s):
                del work[m]
            else:
                work[m] = s
        else:
            work[m] = K.neg(c)

def divide(p, divisors):
    return p.ring.divide(p, divisors)

def default_names(n):
    if n <= 3:
        return ("x", "y", "z")[:n]
    return tuple(f"x{i}" for i in range(1, n + 1))
