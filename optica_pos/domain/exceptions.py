"""
Custom exceptions for the optical shop ledger.

These exceptions represent domain-level errors and are independent
of the store adapter in use (Supabase, in-memory, ...).
"""

from typing import Any, Optional


class OpticaError(Exception):
    """Base exception for all ledger errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(OpticaError):
    """Raised when an input field is missing or malformed."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        message = f"Validation failed for {field}: {reason}"
        super().__init__(
            message=message,
            details={"field": field, "value": None if value is None else str(value), "reason": reason},
        )


class NotFoundError(OpticaError):
    """Raised when a referenced record does not exist at mutation time."""

    def __init__(self, entity: str, record_id: Any):
        self.entity = entity
        self.record_id = record_id
        super().__init__(
            message=f"{entity} not found: {record_id}",
            details={"entity": entity, "id": str(record_id)},
        )


class StoreError(OpticaError):
    """Raised when the underlying store fails (connectivity, constraint violation)."""

    def __init__(self, operation: str, reason: Optional[str] = None, code: Optional[str] = None):
        self.operation = operation
        self.code = code
        message = f"Store {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message,
            details={"operation": operation, "reason": reason, "code": code},
        )

    @property
    def is_constraint_violation(self) -> bool:
        """True for foreign key, unique and check violations (SQLSTATE class 23)."""
        return bool(self.code and self.code.startswith("23"))
