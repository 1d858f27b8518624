"""Infrastructure Layer — third-party library wrappers and cross-cutting concerns.

Invariants:
    - Library exceptions never escape: they are mapped to core/errors.py types

Design Decisions:
    - Thin wrappers over raw libraries (ADR: single responsibility)
"""
