"""Record Validation: tests for concurrent per-field dispatch.

Tests cover:
    - Required-but-absent fields report "<Title> is required." without a handler call
    - Discriminator errors are the sole message and dispatch nothing
    - String results become messages; True/None are success
    - Unknown field types and handlers without validate() are accepted
    - Registry and handler exceptions abort with application errors, promptly
    - Field handlers run concurrently and get a named copy of the settings
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from typegate.core.errors import FieldHandlerError, FieldTypeLoadError
from typegate.core.type_schema import TypeSchema
from typegate.services.field_types import FieldTypeRegistry
from typegate.services.validate_record import RecordValidator


class _FakeRegistry:
    """Registry returning configured handlers; ids in `broken` raise on load."""

    def __init__(self, handlers=None, broken=()):
        self.handlers = handlers or {}
        self.broken = set(broken)
        self.loaded = []

    async def load(self, field_type):
        self.loaded.append(field_type)
        if field_type in self.broken:
            raise ConnectionError("registry offline")
        return self.handlers.get(field_type)


def _schema(fields: dict) -> TypeSchema:
    return TypeSchema.model_validate({"fields": fields})


@pytest.mark.asyncio
async def test_required_field_missing_reports_title():
    handler = MagicMock()
    schema = _schema({"name": {"required": True, "title": "Name", "type": "string"}})
    validator = RecordValidator(schema, _FakeRegistry({"string": handler}))

    assert await validator.validate({}) == ["Name is required."]
    handler.validate.assert_not_called()


@pytest.mark.asyncio
async def test_optional_missing_field_is_not_checked():
    registry = _FakeRegistry()
    validator = RecordValidator(_schema({"nick": {"type": "text"}}), registry)
    assert await validator.validate({}) == []
    assert registry.loaded == []


@pytest.mark.asyncio
async def test_all_handlers_succeed_returns_empty_list(person_schema):
    validator = RecordValidator(person_schema, FieldTypeRegistry())
    errors = await validator.validate(
        {"name": "Ada", "email": "ada@example.com", "age": 36},
    )
    assert errors == []


@pytest.mark.asyncio
async def test_handler_messages_are_collected(person_schema):
    validator = RecordValidator(person_schema, FieldTypeRegistry())
    errors = await validator.validate({"name": 7, "email": "nope", "age": -1})
    assert sorted(errors) == sorted([
        "Name must be text.",
        "Email must be a valid email address.",
        "Age must be at least 0.",
    ])


@pytest.mark.asyncio
async def test_missing_discriminator_is_sole_error(content_schema):
    registry = _FakeRegistry()
    validator = RecordValidator(content_schema, registry)
    assert await validator.validate({"title": "Hi"}) == ["Error: type is required."]
    assert registry.loaded == []


@pytest.mark.asyncio
async def test_unknown_subtype_is_sole_error(content_schema):
    registry = _FakeRegistry()
    validator = RecordValidator(content_schema, registry)
    errors = await validator.validate({"type": "bogus", "title": 5})
    assert errors == ["Error: unrecognized type: bogus."]
    assert registry.loaded == []


@pytest.mark.asyncio
async def test_polymorphic_validates_subtype_fields(content_schema):
    validator = RecordValidator(content_schema, FieldTypeRegistry())
    assert await validator.validate({"type": "link"}) == ["URL is required."]
    assert await validator.validate({"type": "article", "title": "Hi"}) == []


@pytest.mark.asyncio
async def test_unknown_field_type_is_accepted():
    validator = RecordValidator(
        _schema({"where": {"type": "geo", "required": True}}), _FakeRegistry(),
    )
    assert await validator.validate({"where": "anything"}) == []


@pytest.mark.asyncio
async def test_untyped_field_is_accepted_without_lookup(caplog):
    registry = _FakeRegistry()
    validator = RecordValidator(_schema({"count": {"title": "Count"}}), registry)

    with caplog.at_level("WARNING", logger="typegate.services.validate_record"):
        assert await validator.validate({"count": 5}) == []

    assert registry.loaded == []
    assert "declares no type" in caplog.text


@pytest.mark.asyncio
async def test_untyped_field_is_accepted_by_builtin_registry():
    validator = RecordValidator(
        _schema({"count": {"title": "Count"}}), FieldTypeRegistry(),
    )
    assert await validator.validate({"count": 5}) == []


@pytest.mark.asyncio
async def test_handler_without_validate_is_accepted():
    class _Opaque:
        name = "opaque"

    validator = RecordValidator(
        _schema({"blob": {"type": "opaque"}}), _FakeRegistry({"opaque": _Opaque()}),
    )
    assert await validator.validate({"blob": object()}) == []


@pytest.mark.asyncio
async def test_true_and_none_results_are_success():
    class _Ok:
        def validate(self, settings, record):
            return True

    class _Quiet:
        async def validate(self, settings, record):
            return None

    schema = _schema({"a": {"type": "ok"}, "b": {"type": "quiet"}})
    registry = _FakeRegistry({"ok": _Ok(), "quiet": _Quiet()})
    assert await RecordValidator(schema, registry).validate({"a": 1, "b": 2}) == []


@pytest.mark.asyncio
async def test_handler_receives_named_copy(person_schema):
    seen = []

    class _Spy:
        def validate(self, settings, record):
            seen.append((settings.name, record[settings.name]))
            return True

    registry = _FakeRegistry({"text": _Spy(), "email": _Spy(), "integer": _Spy()})
    await RecordValidator(person_schema, registry).validate(
        {"name": "Ada", "email": "a@b.co"},
    )
    assert sorted(seen) == [("email", "a@b.co"), ("name", "Ada")]
    assert all(s.name is None for s in person_schema.fields.values())


@pytest.mark.asyncio
async def test_registry_failure_raises_load_error():
    validator = RecordValidator(
        _schema({"where": {"type": "geo"}}), _FakeRegistry(broken={"geo"}),
    )
    with pytest.raises(FieldTypeLoadError) as exc:
        await validator.validate({"where": "x"})
    assert exc.value.field_type == "geo"
    assert isinstance(exc.value.__cause__, ConnectionError)


@pytest.mark.asyncio
async def test_handler_exception_raises_handler_error():
    class _Broken:
        async def validate(self, settings, record):
            raise KeyError("lookup")

    validator = RecordValidator(
        _schema({"code": {"type": "broken"}}), _FakeRegistry({"broken": _Broken()}),
    )
    with pytest.raises(FieldHandlerError) as exc:
        await validator.validate({"code": "x"})
    assert exc.value.field_name == "code"


@pytest.mark.asyncio
async def test_application_error_returns_without_waiting_for_siblings():
    release = asyncio.Event()
    finished = []

    class _Slow:
        async def validate(self, settings, record):
            await release.wait()
            finished.append(settings.name)
            return "never observed"

    class _Broken:
        async def validate(self, settings, record):
            raise RuntimeError("boom")

    schema = _schema({"slow": {"type": "slow"}, "bad": {"type": "broken"}})
    registry = _FakeRegistry({"slow": _Slow(), "broken": _Broken()})

    with pytest.raises(FieldHandlerError):
        await asyncio.wait_for(
            RecordValidator(schema, registry).validate({"slow": 1, "bad": 2}),
            timeout=1,
        )
    assert finished == []

    # Sibling was not cancelled: it still runs to completion once released.
    release.set()
    for _ in range(5):
        await asyncio.sleep(0)
    assert finished == ["slow"]


@pytest.mark.asyncio
async def test_fields_are_validated_concurrently():
    first_started = asyncio.Event()

    class _First:
        async def validate(self, settings, record):
            first_started.set()
            return "first"

    class _Second:
        async def validate(self, settings, record):
            # Would deadlock if fields were checked one after another in reverse.
            await first_started.wait()
            return "second"

    schema = _schema({"b": {"type": "second"}, "a": {"type": "first"}})
    registry = _FakeRegistry({"first": _First(), "second": _Second()})
    errors = await asyncio.wait_for(
        RecordValidator(schema, registry).validate({"a": 1, "b": 2}), timeout=1,
    )
    assert sorted(errors) == ["first", "second"]
