from dataclasses import dataclass
from fractions import Fraction
from numbers import Integral, Rational as _RationalNumber

from .structures import (implements, check_nonzero, RingOps,
                         Field, EuclideanDomain)

@implements(Field, EuclideanDomain)
@dataclass(frozen=True)
class Rationals(RingOps):
    def __repr__(self):
        return "QQ"

    def convert(self, value):
        if isinstance(value, Fraction):
            return value
        if isinstance(value, (_RationalNumber, str)):
            return Fraction(value)
        raise TypeError(f"cannot convert {value!r} to a rational")

    def zero(self):
        return Fraction(0)

    def one(self):
        return Fraction(1)

    def is_zero(self, a):
        return a == 0

    def eq(self, a, b):
        return a == b

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return a * b

    def inv(self, a):
        check_nonzero(self, a)
        return 1 / a

    def div(self, a, b):
        check_nonzero(self, b)
        return a / b

    def valuation(self, a):
        check_nonzero(self, a)
        return 0

    def divmod(self, a, b):
        return self.div(a, b), Fraction(0)

    def characteristic(self):
        return 0

@implements(Field, EuclideanDomain)
@dataclass(frozen=True)
class PrimeField(RingOps):
    p : int

    def __post_init__(self):
        if not is_prime(self.p):
            raise ValueError(f"{self.p} is not prime")

    def __repr__(self):
        return f"GF({self.p})"

    def convert(self, value):
        if isinstance(value, Fraction):
            return self.div(value.numerator % self.p,
                            value.denominator % self.p)
        if isinstance(value, Integral):
            return int(value) % self.p
        raise TypeError(f"cannot convert {value!r} to {self!r}")

    def zero(self):
        return 0

    def one(self):
        return 1

    def is_zero(self, a):
        return a == 0

    def eq(self, a, b):
        return a == b

    def add(self, a, b):
        return (a + b) % self.p

    def sub(self, a, b):
        return (a - b) % self.p

    def neg(self, a):
        return -a % self.p

    def mul(self, a, b):
        return a * b % self.p

    def inv(self, a):
        check_nonzero(self, a)
        return pow(a, -1, self.p)

    def div(self, a, b):
        return self.mul(a, self.inv(b))

    def valuation(self, a):
        check_nonzero(self, a)
        return 0

    def divmod(self, a, b):
        return self.div(a, b), 0

    def characteristic(self):
        return self.p

@implements(EuclideanDomain)
@dataclass(frozen=True)
class Integers(RingOps):
    def __repr__(self):
        return "ZZ"

    def convert(self, value):
        if isinstance(value, Integral):
            return int(value)
        if isinstance(value, Fraction) and value.denominator == 1:
            return value.numerator
        raise TypeError(f"cannot convert {value!r} to an integer")

    def zero(self):
        return 0

    def one(self):
        return 1

    def is_zero(self, a):
        return a == 0

    def eq(self, a, b):
        return a == b

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return a * b

    def valuation(self, a):
        check_nonzero(self, a)
        return abs(a)

    def divmod(self, a, b):
        check_nonzero(self, b)
        return divmod(a, b)

    def gcd(self, a, b):
        while b:
            a, b = b, a % b
        return abs(a)

    def characteristic(self):
        return 0

def is_prime(n):
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    d = 3
    while d * d <= n:
        if n % d == 0:
            return False
        d += 2
    return True

QQ = Rationals()
ZZ = Integers()

def GF(p):
    return PrimeField(p)
