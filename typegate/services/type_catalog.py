"""Type Catalog: registered resource types, loaded once at startup.

Invariants:
    - Schemas are parsed once and shared read-only afterwards
    - get() raises ResourceTypeNotFoundError for unknown names
    - Malformed sources raise CatalogError (never a half-loaded catalog)
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from typegate.core.errors import CatalogError, ResourceTypeNotFoundError
from typegate.core.repository_protocols import RecordRepository, TypeRegistry
from typegate.core.type_schema import TypeSchema
from typegate.services.resource_model import ResourceModel

logger = logging.getLogger(__name__)


class TypeCatalog:
    """Name -> TypeSchema lookup."""

    def __init__(self, schemas: dict[str, TypeSchema] | None = None):
        self._schemas = dict(schemas or {})

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> "TypeCatalog":
        schemas = {}
        for type_name, definition in raw.items():
            try:
                schemas[type_name] = TypeSchema.model_validate(definition)
            except ValidationError as e:
                raise CatalogError(f"type '{type_name}' is invalid: {e}") from e
        return cls(schemas)

    @classmethod
    def from_file(cls, path: str | Path) -> "TypeCatalog":
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"cannot read {path}: {e}") from e
        if not isinstance(raw, dict):
            raise CatalogError(f"{path} must hold an object of type schemas")
        catalog = cls.from_mapping(raw)
        logger.info(f"Loaded {len(catalog.names())} type(s) from {path}")
        return catalog

    def names(self) -> list[str]:
        return sorted(self._schemas)

    def get(self, type_name: str) -> TypeSchema:
        schema = self._schemas.get(type_name)
        if schema is None:
            raise ResourceTypeNotFoundError(type_name)
        return schema

    def model(
        self, type_name: str, registry: TypeRegistry,
        repository: RecordRepository | None = None,
    ) -> ResourceModel:
        return ResourceModel(type_name, self.get(type_name), registry, repository)
