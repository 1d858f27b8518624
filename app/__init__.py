"""Evolution Mock API — in-memory multi-tenant messaging instance manager.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
