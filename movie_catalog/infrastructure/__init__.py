"""Infrastructure Layer — database, cache, security primitives, file storage, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
"""
