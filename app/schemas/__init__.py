"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain objects from core/ never leak to the wire without a schema

Design Decisions:
    - Separate from core dataclasses: schemas are API contracts, core is state
"""
