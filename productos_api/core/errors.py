"""Error Hierarchy — typed, categorized exceptions for every Productos API failure mode.

Invariants:
    - Every error has a title (error), a user message (mensaje), a code,
      a category (ErrorCategory) and a severity (ErrorSeverity)
    - Client errors (400/404) are WARNING; infrastructure errors (500) are CRITICAL
    - to_response() produces the JSON error envelope {error, mensaje, links, ...context}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ProductosError base: one FastAPI handler catches all (ADR: uniform error shape)
    - Conflict maps to 400, not 409: clients of the original API already expect 400 for duplicates
    - DatabaseError subclasses InternalFailureError: handlers re-label both with one except clause
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and log level selection."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class ProductosError(Exception):
    """Base exception for all Productos API errors."""

    def __init__(
        self,
        error: str,
        mensaje: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(mensaje)
        self.error = error
        self.mensaje = mensaje
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_response(self, links: list[dict] | None = None) -> dict:
        """Convert to the standardized JSON error envelope."""
        return {
            "error": self.error,
            "mensaje": self.mensaje,
            **self.context,
            "links": links or [],
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidInputError(ProductosError):
    """Malformed, missing or out-of-range request data."""
    def __init__(self, error: str, mensaje: str, **context: Any):
        super().__init__(
            error, mensaje, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400, context,
        )


class ResourceNotFoundError(ProductosError):
    """Referenced producto id does not exist."""
    def __init__(self, producto_id: int | str):
        super().__init__(
            "Producto no encontrado",
            f"No existe un producto con ID {producto_id}",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )
        self.producto_id = producto_id


class ConflictError(ProductosError):
    """The store reported a uniqueness violation."""
    def __init__(self, mensaje: str = "Ya existe un producto con esos datos"):
        super().__init__(
            "Producto duplicado", mensaje, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalFailureError(ProductosError):
    """Unexpected store or runtime fault."""
    def __init__(
        self,
        mensaje: str,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        code: str = "INTERNAL_ERROR",
    ):
        super().__init__(
            "Error interno del servidor", mensaje, code, category,
            ErrorSeverity.CRITICAL, 500,
        )


class DatabaseError(InternalFailureError):
    """Database operation failed. detail and operation stay out of the envelope."""
    def __init__(self, detail: str, operation: str):
        super().__init__(
            "Error al acceder a la base de datos",
            ErrorCategory.DATABASE, "DATABASE_ERROR",
        )
        self.detail = detail
        self.operation = operation
