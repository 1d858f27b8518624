"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints except /manager return structured JSON responses

Design Decisions:
    - Thin routes delegate to the InstanceGateway facade
"""
