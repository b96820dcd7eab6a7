"""Schema Resolution: pick the effective (sub)schema and field set for a record.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Polymorphic: the subtype's own fields are used, never merged with the parent
    - Missing/unknown discriminator raises before any field is looked at
"""

from typegate.core.errors import MissingDiscriminatorError, UnknownSubtypeError
from typegate.core.type_schema import DISCRIMINATOR, FieldSettings, Record, TypeSchema


def resolve_schema(type_schema: TypeSchema, record: Record) -> TypeSchema:
    """Return the schema that governs record: itself, or the matched subtype."""
    if not type_schema.polymorphic:
        return type_schema
    subtype = record.get(DISCRIMINATOR)
    if not subtype:
        raise MissingDiscriminatorError()
    subtypes = type_schema.subtypes or {}
    if not isinstance(subtype, str) or subtype not in subtypes:
        raise UnknownSubtypeError(subtype)
    return subtypes[subtype]


def resolve_fields(
    type_schema: TypeSchema, record: Record,
) -> dict[str, FieldSettings]:
    """Effective field map for record. Empty for fieldless types."""
    return resolve_schema(type_schema, record).fields or {}
