"""API Layer — FastAPI routes, dependencies, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes are thin: validate, authorize via dependencies, delegate to a service
"""
