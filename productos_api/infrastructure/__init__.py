"""Infrastructure Layer — database pool and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/ or services/
    - All database exceptions mapped to the domain error hierarchy before leaving this layer
"""
