"""Record Validation: concurrent per-field dispatch with error aggregation.

Invariants:
    - Discriminator errors short-circuit: returned as the ONLY message, no handler runs
    - One asyncio task per declared field; results joined with asyncio.gather
    - Required + absent -> "<title> is required.", handler never invoked
    - Absent + optional -> no check at all
    - Untyped field, unknown field type or handler without validate() -> field accepted
    - Registry/handler exceptions are application errors: validate() raises on the
      first one; sibling tasks are not cancelled, their results are discarded
    - Message order is unspecified
    - Schema-owned FieldSettings never mutated: handlers get a named copy

Known limitation:
    - No timeout: a handler that never completes stalls validate() indefinitely

Design Decisions:
    - Each task returns its message instead of appending to a shared list;
      gather is the result channel
    - gather without return_exceptions: first exception propagates immediately
      and the remaining tasks keep running unobserved
"""

import asyncio
import inspect
import logging

from typegate.core.errors import (
    FieldHandlerError,
    FieldTypeLoadError,
    SchemaResolutionError,
    TypeGateError,
)
from typegate.core.repository_protocols import TypeRegistry
from typegate.core.resolve_fields import resolve_fields
from typegate.core.type_schema import FieldSettings, Record, TypeSchema

logger = logging.getLogger(__name__)


class RecordValidator:
    """Validates records of one resource type against its schema."""

    def __init__(
        self, type_schema: TypeSchema, registry: TypeRegistry,
        type_name: str | None = None,
    ):
        self.type_schema = type_schema
        self.registry = registry
        self.type_name = type_name

    async def validate(self, record: Record) -> list[str]:
        """Return validation messages for record (empty list = valid)."""
        try:
            fields = resolve_fields(self.type_schema, record)
        except SchemaResolutionError as e:
            return [e.message]

        results = await asyncio.gather(*(
            self._check_field(field_name, settings, record)
            for field_name, settings in fields.items()
        ))
        return [message for message in results if message is not None]

    async def _check_field(
        self, field_name: str, settings: FieldSettings, record: Record,
    ) -> str | None:
        """Check one field. Returns a message, None when valid, raises on app errors."""
        named = settings.with_name(field_name)
        if field_name not in record:
            if named.required:
                return f"{named.label} is required."
            return None

        handler = await self._load_handler(named)
        validate = getattr(handler, "validate", None)
        if handler is None or not callable(validate):
            return None

        try:
            result = validate(named, record)
            if inspect.isawaitable(result):
                result = await result
        except TypeGateError:
            raise
        except Exception as e:
            logger.error(
                f"Handler for field '{field_name}' raised: {e}",
                exc_info=True,
                extra=self._log_extra(named, "FIELD_HANDLER_FAILED"),
            )
            raise FieldHandlerError(field_name, named.field_type, str(e)) from e

        if isinstance(result, str):
            return result
        return None

    async def _load_handler(self, settings: FieldSettings) -> object | None:
        if settings.field_type is None:
            logger.warning(
                f"Field '{settings.name}' declares no type, accepted without checks",
                extra=self._log_extra(settings, None),
            )
            return None
        try:
            handler = await self.registry.load(settings.field_type)
        except TypeGateError:
            raise
        except Exception as e:
            logger.error(
                f"Field type '{settings.field_type}' failed to load: {e}",
                exc_info=True,
                extra=self._log_extra(settings, "FIELD_TYPE_LOAD_FAILED"),
            )
            raise FieldTypeLoadError(settings.field_type, str(e)) from e

        if handler is None:
            logger.warning(
                f"Unrecognized field type '{settings.field_type}', "
                f"field '{settings.name}' accepted without checks",
                extra=self._log_extra(settings, None),
            )
        return handler

    def _log_extra(self, settings: FieldSettings, error_code: str | None) -> dict:
        return {
            "type_name": self.type_name,
            "field_name": settings.name,
            "field_type": settings.field_type,
            "error_code": error_code,
        }
