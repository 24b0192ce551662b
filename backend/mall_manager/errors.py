"""
Error hierarchy for mall/store operations.

Domain errors (validation, capacity, not found) are recoverable and map to
4xx responses; DatabaseError wraps backing-store failures and maps to 503.
"""
from enum import Enum
from typing import Any, Optional


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"


class MallManagerError(Exception):
    """Base exception for all mall manager errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
            }
        }


# --- Domain errors ---

class ValidationError(MallManagerError):
    """One or more fields failed validation. `errors` maps field -> messages."""

    def __init__(
        self,
        errors: dict[str, list[str]],
        code: str = "VALIDATION_ERROR",
        category: ErrorCategory = ErrorCategory.VALIDATION,
    ):
        self.errors = {field: list(messages) for field, messages in errors.items()}
        super().__init__(
            _full_messages(self.errors), code, category, http_status=422,
        )

    def to_response(self) -> dict[str, Any]:
        body = super().to_response()
        body["error"]["fields"] = self.errors
        return body


class CapacityExceededError(ValidationError):
    """The target mall already holds as many stores as its capacity allows."""

    MESSAGE = "too many stores"

    def __init__(
        self,
        mall_id: Any,
        capacity: int,
        errors: Optional[dict[str, list[str]]] = None,
    ):
        merged = {field: list(messages) for field, messages in (errors or {}).items()}
        merged.setdefault("capacity", []).append(self.MESSAGE)
        super().__init__(
            merged, code="CAPACITY_EXCEEDED", category=ErrorCategory.BUSINESS_RULE,
        )
        self.mall_id = mall_id
        self.capacity = capacity


class NotFoundError(MallManagerError):
    """Referenced mall or store does not exist."""

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, http_status=404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# --- Infrastructure errors ---

class DatabaseError(MallManagerError):
    """Backing store failed; never caused by user input."""

    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, http_status=503,
        )
        self.operation = operation


def _full_messages(errors: dict[str, list[str]]) -> str:
    """'Name can't be blank, City can't be blank'"""
    parts = [
        f"{field.replace('_', ' ').capitalize()} {message}"
        for field, messages in errors.items()
        for message in messages
    ]
    return ", ".join(parts) or "Validation failed"
