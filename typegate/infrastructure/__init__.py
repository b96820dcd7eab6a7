"""Infrastructure Layer: database sessions, persistence, logging setup.

Invariants:
    - Implements the Protocols declared in core/repository_protocols.py
    - Never imported by core/
"""
