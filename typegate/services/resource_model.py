"""Resource Model: validate, project and persist records of one resource type.

Invariants:
    - Application errors from validate() or the repository propagate unchanged
    - Records with validation messages are NEVER persisted (no partial writes)
    - standalone is False (explicitly, on the type or the resolved subtype)
      -> validate-only: repository never called
    - Missing repository for a record that must persist -> RepositoryNotConfiguredError
    - Only the projected record reaches the repository
    - No state shared across calls beyond the read-only schema
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from typegate.core.errors import RepositoryNotConfiguredError
from typegate.core.project_record import project_record
from typegate.core.repository_protocols import RecordRepository, TypeRegistry
from typegate.core.resolve_fields import resolve_schema
from typegate.core.type_schema import Record, TypeSchema
from typegate.services.validate_record import RecordValidator

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    """Outcome of validate_and_save.

    record is the saved record when persisted, otherwise the submitted one.
    """
    record: Record
    errors: list[str] = field(default_factory=list)
    persisted: bool = False

    @property
    def valid(self) -> bool:
        return not self.errors


class ResourceModel:
    """Binds a type schema to its field-type registry and repository."""

    def __init__(
        self,
        type_name: str,
        type_schema: TypeSchema,
        registry: TypeRegistry,
        repository: RecordRepository | None = None,
    ):
        self.type_name = type_name
        self.type_schema = type_schema
        self.repository = repository
        self._validator = RecordValidator(type_schema, registry, type_name)

    @property
    def subtypes(self) -> dict[str, TypeSchema]:
        return dict(self.type_schema.subtypes or {})

    async def validate(self, record: Record) -> list[str]:
        return await self._validator.validate(record)

    def filter(self, record: Record, fields: Iterable[str] | None = None) -> Record:
        return project_record(record, self.type_schema, fields)

    def _standalone(self, record: Record) -> bool:
        """False when the type or the record's resolved subtype sets standalone=False."""
        if self.type_schema.standalone is False:
            return False
        return resolve_schema(self.type_schema, record).standalone is not False

    async def validate_and_save(self, record: Record) -> SaveResult:
        errors = await self.validate(record)
        if errors:
            logger.info(
                f"Rejected '{self.type_name}' record with {len(errors)} error(s)",
                extra={"type_name": self.type_name},
            )
            return SaveResult(record=record, errors=errors)

        if not self._standalone(record):
            return SaveResult(record=record)

        if self.repository is None:
            raise RepositoryNotConfiguredError(self.type_name)
        saved = await self.repository.save(self.type_name, self.filter(record))
        logger.info(
            f"Saved '{self.type_name}' record",
            extra={"type_name": self.type_name},
        )
        return SaveResult(record=saved, persisted=True)
