"""
Test suite for exact-rational

Contains:
- tests/unit/          : Unit tests for individual modules
"""
