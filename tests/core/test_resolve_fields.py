"""Schema Resolution: tests for effective field sets under polymorphism.

Tests cover:
    - Non-polymorphic types return their own fields (empty for fieldless)
    - Polymorphic types return the matched subtype's fields only
    - Missing / unknown discriminator raise the matching error
"""

import pytest

from typegate.core.errors import MissingDiscriminatorError, UnknownSubtypeError
from typegate.core.resolve_fields import resolve_fields, resolve_schema
from typegate.core.type_schema import TypeSchema


def test_plain_type_returns_declared_fields(person_schema):
    fields = resolve_fields(person_schema, {})
    assert list(fields) == ["name", "email", "age"]


def test_fieldless_type_returns_empty_mapping(fieldless_schema):
    assert resolve_fields(fieldless_schema, {"a": 1}) == {}


def test_polymorphic_returns_subtype_fields(content_schema):
    fields = resolve_fields(content_schema, {"type": "link"})
    assert list(fields) == ["url"]


def test_polymorphic_does_not_merge_parent_fields():
    schema = TypeSchema.model_validate({
        "polymorphic": True,
        "fields": {"owner": {"title": "Owner", "type": "text", "required": True}},
        "subtypes": {"note": {"fields": {"text": {"type": "text"}}}},
    })
    assert list(resolve_fields(schema, {"type": "note"})) == ["text"]


def test_missing_discriminator_raises(content_schema):
    with pytest.raises(MissingDiscriminatorError) as exc:
        resolve_fields(content_schema, {"title": "Hi"})
    assert exc.value.message == "Error: type is required."


def test_empty_discriminator_counts_as_missing(content_schema):
    with pytest.raises(MissingDiscriminatorError):
        resolve_fields(content_schema, {"type": ""})


def test_unknown_subtype_raises(content_schema):
    with pytest.raises(UnknownSubtypeError) as exc:
        resolve_fields(content_schema, {"type": "bogus"})
    assert exc.value.message == "Error: unrecognized type: bogus."
    assert exc.value.subtype == "bogus"


def test_resolve_schema_returns_subtype(content_schema):
    subtype = resolve_schema(content_schema, {"type": "article"})
    assert subtype is content_schema.subtypes["article"]


def test_fieldless_subtype_resolves_to_empty():
    schema = TypeSchema.model_validate({
        "polymorphic": True, "subtypes": {"marker": {}},
    })
    assert resolve_fields(schema, {"type": "marker"}) == {}
