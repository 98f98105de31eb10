"""Productos API Package — CRUD REST API for a single product catalogue.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
