"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных значений.
"""

from .validators import (
    ContractValidator,
    RationalValidator,
    SchemaLoader,
    validate_rational,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "RationalValidator",
    # Functions
    "validate_rational",
]
