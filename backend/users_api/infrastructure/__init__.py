"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - Engine errors are mapped to StorageError at the session boundary
"""
