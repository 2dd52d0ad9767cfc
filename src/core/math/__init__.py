"""
Core math modules

Точная рациональная арифметика над произвольным скаляром
упорядоченного кольца.
"""

# Scalar capability contract
from src.core.math.scalar import (
    INTEGER_OPS,
    POWER_BASE,
    CapabilityNotSupported,
    IntegerOps,
    OrderedRing,
    ScalarOps,
    is_scalar,
    register_scalar,
    scalar_ops,
)

# Rational
from src.core.math.rational import (
    NegativeOperandError,
    Rational,
    RationalOps,
    ZeroDenominatorError,
    gcf,
    reduce_pair,
)

__all__ = [
    # Scalar — Constants
    "INTEGER_OPS",
    "POWER_BASE",
    # Scalar — Exceptions
    "CapabilityNotSupported",
    # Scalar — Types
    "IntegerOps",
    "OrderedRing",
    "ScalarOps",
    # Scalar — Functions
    "is_scalar",
    "register_scalar",
    "scalar_ops",
    # Rational — Exceptions
    "NegativeOperandError",
    "ZeroDenominatorError",
    # Rational — Types
    "Rational",
    "RationalOps",
    # Rational — Functions
    "gcf",
    "reduce_pair",
]
