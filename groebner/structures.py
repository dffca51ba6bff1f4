"""Capability contracts for algebraic structures.

A structure (the rationals, a prime field, a polynomial ring) is a
stateless object that knows how to combine plain element values. Which
operations it offers is declared with ``@implements``; the axioms behind
each capability (associativity, distributivity, inverses, ...) are a
promise of the implementer and are never checked at runtime.
"""
from typing import Tuple

from .common import CapabilityError, DivisionByZero

class Capability:
    __slots__ = ("name", "operations", "extends")

    def __init__(self, name, operations, extends=()):
        self.name = name
        self.operations : Tuple[str, ...] = tuple(operations)
        self.extends : Tuple['Capability', ...] = tuple(extends)

    def closure(self):
        yield self
        for cap in self.extends:
            yield from cap.closure()

    def required(self):
        seen = []
        for cap in self.closure():
            for op in cap.operations:
                if op not in seen:
                    seen.append(op)
        return seen

    def __repr__(self):
        return self.name

AdditiveMonoid = Capability(
    "AdditiveMonoid", ("zero", "add", "is_zero", "convert"))

Ring = Capability(
    "Ring", ("neg", "sub", "one", "mul"), (AdditiveMonoid,))

# Multiplication commutes; nothing new to call.
CommutativeRing = Capability(
    "CommutativeRing", (), (Ring,))

EuclideanDomain = Capability(
    "EuclideanDomain", ("valuation", "divmod"), (CommutativeRing,))

Field = Capability(
    "Field", ("inv", "div"), (CommutativeRing,))

def implements(*capabilities):
    def decorate(cls):
        declared = set(getattr(cls, "__capabilities__", ()))
        for cap in capabilities:
            missing = [op for op in cap.required()
                       if not callable(getattr(cls, op, None))]
            if missing:
                raise TypeError(f"{cls.__name__} cannot implement {cap}: "
                                f"missing {', '.join(missing)}")
            declared.update(cap.closure())
        cls.__capabilities__ = frozenset(declared)
        return cls
    return decorate

def satisfies(structure, capability):
    return capability in getattr(structure, "__capabilities__", ())

def require(structure, capability):
    if not satisfies(structure, capability):
        raise CapabilityError(f"{structure!r} is not a {capability}")
    return structure

def capabilities(structure):
    return sorted(getattr(structure, "__capabilities__", ()), key=repr)

class RingOps:
    """Operations every ring gets for free from add/mul/neg/one."""

    def sub(self, a, b):
        return self.add(a, self.neg(b))

    def is_unit(self, a):
        if satisfies(self, Field):
            return not self.is_zero(a)
        return self.eq(a, self.one()) or self.eq(self.neg(a), self.one())

    def eq(self, a, b):
        return self.is_zero(self.sub(a, b))

    def pow(self, a, n):
        if n < 0:
            if not satisfies(self, Field):
                raise CapabilityError(f"negative power in {self!r}")
            a, n = self.inv(a), -n
        result = self.one()
        while n:
            if n & 1:
                result = self.mul(result, a)
            a = self.mul(a, a)
            n >>= 1
        return result

    def sum(self, items):
        total = self.zero()
        for item in items:
            total = self.add(total, item)
        return total

def check_nonzero(structure, a):
    if structure.is_zero(a):
        raise DivisionByZero(f"zero has no inverse in {structure!r}")
