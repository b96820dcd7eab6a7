"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, plugins need not inherit anything
    - FieldTypeHandler.validate is optional: the aggregator probes for it and
      treats its absence as "accept unconditionally", so it is not declared here
"""

from typing import Protocol

from typegate.core.type_schema import Record


class FieldTypeHandler(Protocol):
    """Marker contract for a field-type plugin.

    A handler MAY define ``validate(field_settings, record)``, sync or async,
    returning True/None on success or a message string on failure.
    """
    name: str


class TypeRegistry(Protocol):
    """Resolves field-type ids to handlers. Raising is an application error."""
    async def load(self, field_type: str) -> FieldTypeHandler | None: ...


class RecordRepository(Protocol):
    """Contract for record persistence, implemented by shell."""
    async def save(self, type_name: str, record: Record) -> Record: ...
