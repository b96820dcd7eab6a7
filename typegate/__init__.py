"""typegate: typed record validation and projection service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
