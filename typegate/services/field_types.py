"""Field Type Registry: explicit mapping from field-type id to handler.

Invariants:
    - Every id->handler mapping is visible in one place; no auto-discovery
    - Unknown ids load as None (the validator accepts such fields with a warning)
    - register() replaces an existing mapping for the same id
"""

import logging

from typegate.services.field_handlers import (
    BooleanField,
    EmailField,
    IntegerField,
    ListField,
    NumberField,
    ReferenceField,
    TextField,
)

logger = logging.getLogger(__name__)


class FieldTypeRegistry:
    """Routes field_type -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, handlers: dict[str, object] | None = None):
        text = TextField()
        self._handlers: dict[str, object] = {
            "text": text,
            "string": text,
            "number": NumberField(),
            "integer": IntegerField(),
            "boolean": BooleanField(),
            "email": EmailField(),
            "list": ListField(),
            "reference": ReferenceField(),
        }
        if handlers:
            self._handlers.update(handlers)

    def register(self, field_type: str, handler: object) -> None:
        logger.info(
            f"Registering field type '{field_type}'",
            extra={"field_type": field_type},
        )
        self._handlers[field_type] = handler

    def field_types(self) -> list[str]:
        return sorted(self._handlers)

    async def load(self, field_type: str) -> object | None:
        return self._handlers.get(field_type)
