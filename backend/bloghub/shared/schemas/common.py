"""
Common Schemas

Pieces shared by every endpoint: the ORM-aware base schema, page arithmetic,
and the success/error/health envelopes.

Every JSON body the API returns has a top-level "success" flag:

    {"success": true,  "message": "Post deleted"}
    {"success": false, "error": {"code": "NOT_FOUND", "message": "..."}}
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# Largest OFFSET SQLite and PostgreSQL accept (signed 64-bit)
MAX_OFFSET = 2**63 - 1


class BaseSchema(BaseModel):
    """Response base: built from ORM objects, fillable by field name or alias."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class PaginationParams(BaseModel):
    """
    Page-based pagination.

        PaginationParams(page=3, limit=10).offset     # 20
        PaginationParams(limit=10).total_pages(25)    # 3
    """

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @property
    def offset(self) -> int:
        return min((self.page - 1) * self.limit, MAX_OFFSET)

    def total_pages(self, total: int) -> int:
        return -(-total // self.limit)


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorDetail(BaseModel):
    code: str = Field(description="Machine-readable error code")
    message: str
    details: Optional[dict[str, Any]] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorDetail


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str = "bloghub"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    checks: Optional[dict[str, str]] = None
