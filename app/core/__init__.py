"""Core Layer — pure domain logic, no IO, no async, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - State changes happen only through Instance / InstanceRegistry methods

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
