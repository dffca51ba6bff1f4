import numpy as np
import pytest

from groebner.fields import QQ
from groebner.polynomials import PolynomialRing

def random_poly(rng, ring, nterms=3, maxdeg=2, coeffs=5):
    terms = {}
    for _ in range(nterms):
        exps = tuple(int(e) for e in rng.integers(0, maxdeg + 1, size=ring.nvars))
        terms[exps] = int(rng.integers(-coeffs, coeffs + 1))
    return ring.polynomial(terms)

@pytest.fixture
def rng():
    return np.random.default_rng(20240611)

@pytest.fixture
def make_poly(rng):
    def make(ring, nterms=3, maxdeg=2, coeffs=5):
        return random_poly(rng, ring, nterms, maxdeg, coeffs)
    return make

@pytest.fixture
def qxy():
    return PolynomialRing(QQ, 2, "grevlex", names="x y")
