"""
Core value types, capability contracts, and serialization contracts.

This module contains the foundational building blocks of exact rational
arithmetic. It has no I/O and no external services.
"""
