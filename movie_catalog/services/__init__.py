"""Services — one class per resource, wrapping an AsyncSession.

Invariants:
    - Services raise CatalogError subclasses at the point of failure
    - Services commit their own unit of work; routes never touch the session
"""
