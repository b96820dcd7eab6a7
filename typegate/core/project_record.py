"""Record Projection: reduce a record to the fields its schema permits.

Invariants:
    - Input record is never mutated
    - Fieldless, non-polymorphic types return the record itself (identity)
    - Polymorphic projections always keep the discriminator key
    - An explicit field selection replaces the declared field set
"""

from collections.abc import Iterable

from typegate.core.resolve_fields import resolve_schema
from typegate.core.type_schema import DISCRIMINATOR, Record, TypeSchema


def project_record(
    record: Record,
    type_schema: TypeSchema,
    fields: Iterable[str] | None = None,
) -> Record:
    """Project record onto fields (or the schema's declared fields)."""
    if type_schema.is_fieldless:
        return record

    if type_schema.polymorphic:
        subtype = resolve_schema(type_schema, record)
        selected = list(fields) if fields is not None else subtype.field_names()
        if DISCRIMINATOR not in selected:
            selected.insert(0, DISCRIMINATOR)
    else:
        selected = list(fields) if fields is not None else type_schema.field_names()

    return {name: record[name] for name in selected if name in record}
