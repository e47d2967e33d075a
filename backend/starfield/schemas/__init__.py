"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (browser input)
    - Core rules receive plain dicts produced by the schemas

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
