"""
Common schemas shared across API endpoints.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginationMeta(BaseModel):
    """Pagination metadata."""

    limit: int = Field(..., ge=1, description="Items per page")
    offset: int = Field(..., ge=0, description="Items skipped")
    total_items: int = Field(..., ge=0, description="Total matching items")
    has_next: bool = Field(..., description="Whether there is a next page")
    has_prev: bool = Field(..., description="Whether there is a previous page")


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response."""

    data: List[T]
    pagination: PaginationMeta


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    status: str
    database: str


class DeploymentVersion(BaseModel):
    """Build metadata; empty strings when not provided at deploy time."""

    appVersion: str
    buildNumber: str
    packageVersion: str
