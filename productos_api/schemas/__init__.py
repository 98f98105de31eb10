"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Schemas validate JSON shape at the system boundary
    - Business rules (ranges, categories, required fields) live in core/validation.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
