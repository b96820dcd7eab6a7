"""Services Layer: field-type registry, record validation, resource models.

Invariants:
    - Field-type registry uses an explicit dict mapping (no auto-discovery)
    - Services never build HTTP responses; api/ maps results to envelopes
"""
