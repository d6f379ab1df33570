"""Users API Package — CRUD over a single User table.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
