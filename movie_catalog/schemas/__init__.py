"""Pydantic Schemas — request/response contracts for the HTTP API.

Invariants:
    - Wire format is camelCase (alias generator); Python attributes stay snake_case
    - Request bodies forbid unknown fields
    - Response schemas never expose password hashes

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
