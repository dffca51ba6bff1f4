from fractions import Fraction

import pytest

from groebner.common import CapabilityError, DivisionByZero
from groebner.fields import QQ, ZZ, GF, PrimeField, Rationals
from groebner.polynomials import PolynomialRing
from groebner.structures import (implements, satisfies, require, capabilities,
                                 AdditiveMonoid, Ring, CommutativeRing,
                                 EuclideanDomain, Field)

def test_rationals_capabilities():
    for cap in (AdditiveMonoid, Ring, CommutativeRing, EuclideanDomain, Field):
        assert satisfies(QQ, cap)
    assert capabilities(QQ) == sorted(
        [AdditiveMonoid, Ring, CommutativeRing, EuclideanDomain, Field], key=repr)

def test_integers_are_not_a_field():
    assert satisfies(ZZ, EuclideanDomain)
    assert satisfies(ZZ, CommutativeRing)
    assert not satisfies(ZZ, Field)
    with pytest.raises(CapabilityError):
        require(ZZ, Field)

def test_implements_checks_operations():
    with pytest.raises(TypeError, match="missing"):
        @implements(Ring)
        class Broken:
            def zero(self):
                return 0

def test_plain_objects_satisfy_nothing():
    assert not satisfies(object(), AdditiveMonoid)

def test_structures_compare_by_value():
    assert Rationals() == QQ
    assert GF(7) == PrimeField(7)
    assert GF(7) != GF(11)
    assert hash(GF(7)) == hash(PrimeField(7))

def test_rational_field_arithmetic():
    a = QQ.convert(3)
    assert isinstance(a, Fraction)
    assert QQ.div(a, QQ.convert("3/2")) == 2
    assert QQ.inv(Fraction(-2, 5)) == Fraction(-5, 2)
    assert QQ.pow(Fraction(2), -2) == Fraction(1, 4)
    assert QQ.sum([1, Fraction(1, 2), Fraction(1, 2)]) == 2

def test_inverse_of_zero():
    with pytest.raises(DivisionByZero):
        QQ.inv(QQ.zero())
    with pytest.raises(ZeroDivisionError):
        GF(5).div(1, 0)

def test_float_coefficients_are_rejected():
    with pytest.raises(TypeError):
        QQ.convert(0.5)

def test_prime_field():
    F = GF(7)
    assert F.inv(3) == 5
    assert F.convert(-1) == 6
    assert F.convert(Fraction(1, 2)) == 4
    assert F.mul(F.convert(Fraction(1, 2)), 2) == 1
    assert F.pow(3, 6) == 1
    assert F.is_unit(3)
    assert not F.is_unit(0)
    assert F.characteristic() == 7

@pytest.mark.parametrize("p", [0, 1, 4, 9, 91])
def test_prime_field_rejects_composites(p):
    with pytest.raises(ValueError):
        PrimeField(p)

def test_integers_euclidean():
    assert ZZ.divmod(7, -2) == (-4, -1)
    assert ZZ.valuation(-6) == 6
    assert ZZ.gcd(12, -18) == 6
    assert ZZ.is_unit(-1)
    assert not ZZ.is_unit(2)
    with pytest.raises(CapabilityError):
        ZZ.pow(2, -1)
    with pytest.raises(DivisionByZero):
        ZZ.divmod(1, 0)

def test_polynomial_ring_is_a_commutative_ring():
    R = PolynomialRing(QQ, 2)
    assert satisfies(R, CommutativeRing)
    assert not satisfies(R, Field)
    x, y = R.gens()
    assert R.add(x, y) == x + y
    assert R.mul(x, y) == R.mul(y, x)
    assert R.sub(x, x) == R.zero()
    assert R.pow(x + 1, 2) == x**2 + 2*x + 1

def test_polynomial_ring_over_integers_cannot_divide():
    R = PolynomialRing(ZZ, 2)
    x, y = R.gens()
    assert (2*x + y) * (x - y) == 2*x**2 - x*y - y**2
    with pytest.raises(CapabilityError):
        R.divide(x, [y])
