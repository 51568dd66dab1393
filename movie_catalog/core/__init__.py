"""Core Layer — pure domain logic: errors, domain types, token and cursor parsing.

Invariants:
    - Nothing in core/ performs IO or imports from services/, api/ or infrastructure/
"""
