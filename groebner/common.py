first  = lambda x: x[0]

class AlgebraError(Exception):
    pass

class ConfigurationMismatch(AlgebraError):
    """Operands were built under different polynomial rings."""

class ZeroPolynomial(AlgebraError):
    """Leading term requested from the zero polynomial."""

EmptyPolynomial = ZeroPolynomial

class NotDivisible(AlgebraError):
    pass

class DivisionByZero(AlgebraError, ZeroDivisionError):
    pass

class DimensionMismatch(AlgebraError, ValueError):
    pass

class CapabilityError(AlgebraError, TypeError):
    pass

class Cancelled(AlgebraError):
    pass
