import pytest

from groebner.common import ZeroPolynomial, ConfigurationMismatch
from groebner.fields import QQ, GF
from groebner.polynomials import PolynomialRing, divide
from groebner.reduction import normal_form

def lex_ring():
    return PolynomialRing(QQ, 2, "lex", names="x y")

def test_single_step_example():
    R = lex_ring()
    x, y = R.gens()
    (q1, q2), r = R.divide(x*y**2 + 1, [x*y + 1, y + 1])
    assert q1 == y
    assert q2 == -1
    assert r == 2

def test_remainder_collects_undividable_terms():
    R = lex_ring()
    x, y = R.gens()
    f = x**2*y + x*y**2 + y**2
    (q1, q2), r = divide(f, [x*y - 1, y**2 - 1])
    assert q1 == x + y
    assert q2 == R.one()
    assert r == x + y + 1

def test_divisor_order_matters():
    R = lex_ring()
    x, y = R.gens()
    f = x**2*y + x*y**2 + y**2
    _, r1 = R.divide(f, [x*y - 1, y**2 - 1])
    _, r2 = R.divide(f, [y**2 - 1, x*y - 1])
    assert r2 == 2*x + 1
    assert r1 != r2

def test_empty_divisor_list(qxy):
    x, y = qxy.gens()
    p = x**3 - y
    quotients, r = qxy.divide(p, [])
    assert quotients == []
    assert r == p

def test_zero_dividend(qxy):
    x, y = qxy.gens()
    quotients, r = qxy.divide(qxy.zero(), [x, y])
    assert all(not q for q in quotients)
    assert not r

def test_zero_divisor_rejected(qxy):
    x, _ = qxy.gens()
    with pytest.raises(ZeroPolynomial):
        qxy.divide(x, [qxy.zero()])

def test_mismatched_divisor(qxy):
    other = PolynomialRing(QQ, 2, "lex")
    with pytest.raises(ConfigurationMismatch):
        qxy.divide(qxy.variable(0), [other.variable(0)])

@pytest.mark.parametrize("field", [QQ, GF(101)], ids=repr)
@pytest.mark.parametrize("order", ["lex", "grlex", "grevlex"])
def test_division_identity(make_poly, field, order):
    R = PolynomialRing(field, 3, order)
    for _ in range(15):
        p = make_poly(R, nterms=6, maxdeg=4)
        divisors = [g for g in (make_poly(R, nterms=3) for _ in range(3)) if g]
        quotients, r = R.divide(p, divisors)
        total = r
        for q, g in zip(quotients, divisors):
            total = total + q * g
        assert total == p
        # no remainder term is divisible by a divisor's leading monomial
        for m in r.terms:
            assert not any(g.lm().divides(m) for g in divisors)
        assert normal_form(p, divisors) == r
