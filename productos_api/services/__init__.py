"""Services Layer — producto handlers and the repository they run against.

Invariants:
    - Handlers validate, call the repository, and build the response envelope
    - Only the repository issues SQL

Design Decisions:
    - Handlers are plain async functions; routes pass the repository and links context in
"""
