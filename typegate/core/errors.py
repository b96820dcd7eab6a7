"""Error Hierarchy: typed, categorized exceptions for all typegate failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are recoverable: they end up as messages in a result list
    - Application errors (lookup, handler, persistence) always propagate to the caller
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TypeGateError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PLUGIN = "plugin"
    CONFIGURATION = "configuration"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    type_name: str | None = None
    field_name: str | None = None
    field_type: str | None = None
    debug_info: dict[str, Any] | None = None


class TypeGateError(Exception):
    """Base exception for all typegate errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "type_name": self.context.type_name,
                    "field_name": self.context.field_name,
                    "field_type": self.context.field_type,
                },
            }
        }


# ─── Validation Errors (recoverable) ────────────────────────────

class SchemaResolutionError(TypeGateError):
    """The record cannot be matched to a (sub)schema. Reported as a message."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class MissingDiscriminatorError(SchemaResolutionError):
    """Polymorphic record carries no type."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Error: type is required.", "MISSING_DISCRIMINATOR", context,
        )


class UnknownSubtypeError(SchemaResolutionError):
    """Polymorphic record's type is not one of the declared subtypes."""
    def __init__(self, subtype: object, context: ErrorContext | None = None):
        super().__init__(
            f"Error: unrecognized type: {subtype}.", "UNKNOWN_SUBTYPE", context,
        )
        self.subtype = subtype


# ─── Lookup Errors (404-level) ──────────────────────────────────

class ResourceTypeNotFoundError(TypeGateError):
    """Requested resource type is not registered in the catalog."""
    def __init__(self, type_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.type_name = type_name
        super().__init__(
            f"Resource type '{type_name}' not found",
            "RESOURCE_TYPE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.type_name = type_name


# ─── Application Errors (500-level) ─────────────────────────────

class FieldTypeLoadError(TypeGateError):
    """The type registry failed while resolving a field-type handler."""
    def __init__(self, field_type: str, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_type = field_type
        super().__init__(
            f"Loading field type '{field_type}' failed: {message}",
            "FIELD_TYPE_LOAD_FAILED", ErrorCategory.PLUGIN,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.field_type = field_type


class FieldHandlerError(TypeGateError):
    """A field-type handler raised while validating a field."""
    def __init__(
        self, field_name: str, field_type: str, message: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_name = field_name
        ctx.field_type = field_type
        super().__init__(
            f"Field '{field_name}' ({field_type}) handler failed: {message}",
            "FIELD_HANDLER_FAILED", ErrorCategory.PLUGIN,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.field_name = field_name
        self.field_type = field_type


class CatalogError(TypeGateError):
    """Type schema source is unreadable or malformed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Type catalog error: {message}",
            "CATALOG_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class RepositoryNotConfiguredError(TypeGateError):
    """A record needs persisting but no repository is bound to its type."""
    def __init__(self, type_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.type_name = type_name
        super().__init__(
            f"No repository bound for type '{type_name}'",
            "REPOSITORY_NOT_CONFIGURED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.type_name = type_name


class DatabaseError(TypeGateError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
