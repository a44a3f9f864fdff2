"""
Error taxonomy for catalog operations.

Each error carries the HTTP status and error code the API layer reports.
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """Base error with a structured representation."""

    status_code = 500
    error = "internal_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        content = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            content["details"] = self.details
        return content


class ValidationError(CatalogError):
    """Malformed input or missing required fields."""

    status_code = 422
    error = "validation_error"


class NotFoundError(CatalogError):
    """Referenced id or natural key does not exist."""

    status_code = 404
    error = "not_found"

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            f"{resource} {identifier} not found",
            details={"resource": resource, "id": identifier},
        )
        self.resource = resource
        self.identifier = identifier


class ConflictError(CatalogError):
    """Ambiguous natural-key match or uniqueness violation."""

    status_code = 409
    error = "conflict"


class TransientStoreError(CatalogError):
    """Connection-level store failure that outlived its retries."""

    status_code = 503
    error = "database_unavailable"

    def __init__(self, message: str = "Database operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
