"""Type Schema: declarative description of a resource type and its fields.

Invariants:
    - TypeSchema and FieldSettings are frozen: shared across concurrent calls
    - fields=None means a fieldless type; fields={} is a type with zero fields
    - field_type=None (no "type" declared) resolves to no handler at all
    - subtypes only meaningful when polymorphic is True
    - FieldSettings.name is only ever set on a per-call copy (see with_name)
    - Type-specific options (min_length, max, ...) kept as pydantic extras

Design Decisions:
    - Pydantic over dataclasses: schemas arrive as JSON from the type catalog
      and need coercion + nested validation of subtypes
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Reserved record key selecting the subtype of a polymorphic type.
DISCRIMINATOR = "type"

Record = dict[str, Any]


class FieldSettings(BaseModel):
    """Settings of one declared field, plus any handler-specific options."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    title: str | None = None
    field_type: str | None = Field(None, alias="type")
    required: bool = False
    name: str | None = None

    def with_name(self, name: str) -> "FieldSettings":
        """Return a copy carrying the field name; self is left untouched."""
        return self.model_copy(update={"name": name})

    @property
    def label(self) -> str:
        """Human label for messages: title, falling back to the field name."""
        return self.title or self.name or ""

    def option(self, key: str, default: Any = None) -> Any:
        """Read a type-specific option (anything beyond the declared fields)."""
        extra = self.model_extra or {}
        return extra.get(key, default)


class TypeSchema(BaseModel):
    """Schema of a resource type. Polymorphic types nest one schema per subtype."""

    model_config = ConfigDict(frozen=True, extra="allow")

    standalone: bool | None = None
    polymorphic: bool = False
    fields: dict[str, FieldSettings] | None = None
    subtypes: dict[str, "TypeSchema"] | None = None

    @property
    def is_fieldless(self) -> bool:
        return not self.polymorphic and self.fields is None

    def field_names(self) -> list[str]:
        return list(self.fields or {})


TypeSchema.model_rebuild()
