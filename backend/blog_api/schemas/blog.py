"""
Blog API: Pydantic Request/Response Schemas
===========================================

What:  Pydantic models defining the API contract.
How:   FastAPI uses these models to parse request bodies, serialize responses
       and generate the OpenAPI document.

Envelope shapes:
    success:  {"success": true, "data": ..., "pagination": {...}}   (pagination on lists only)
    error:    {"success": false, "message": "..."}

Schemas are separate from the SQLAlchemy model so the API contract controls
exactly which columns are exposed.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Bodies: every field optional, presence is checked by the service
# ══════════════════════════════════════════════════════════════════════════


class BlogWrite(BaseModel):
    """
    Body of POST /api/blogs and PUT /api/blogs/{id}.

    Both fields are optional at the schema level: POST requires both,
    PUT requires at least one. Those rules live in BlogService so the
    400 response uses the error envelope rather than FastAPI's 422.
    """
    title: Optional[str] = Field(default=None, description="Blog title")
    content: Optional[str] = Field(default=None, description="Blog body")


class BlogTitlePatch(BaseModel):
    """Body of PATCH /api/blogs/{id}. Anything other than `title` is ignored."""
    title: Optional[str] = Field(default=None, description="New blog title")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BlogResponse(BaseModel):
    """Full representation of a blog, used as `data` in single and list envelopes."""
    id: uuid.UUID = Field(description="Unique blog identifier (UUID)")
    title: str
    content: str
    created_at: datetime = Field(description="When the blog was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the blog was last modified (UTC ISO 8601)")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; stored values are always UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class PageLink(BaseModel):
    """A neighbouring page: the `page` and `limit` to request it with."""
    page: int
    limit: int


class Pagination(BaseModel):
    """
    Links to the neighbouring pages of a list response.

    `next` is present only when more rows exist after this page;
    `prev` only when this page does not start at the first row.
    Absent links are dropped from the JSON, so the object may be `{}`.
    """
    next: Optional[PageLink] = None
    prev: Optional[PageLink] = None


class BlogPage(BaseModel):
    """One page of blogs as produced by BlogService.list_blogs."""
    data: List[BlogResponse]
    pagination: Pagination
    total_count: int


class BlogEnvelope(BaseModel):
    success: bool = True
    data: BlogResponse


class BlogListEnvelope(BaseModel):
    success: bool = True
    data: List[BlogResponse]
    pagination: Pagination


class EmptyEnvelope(BaseModel):
    """Returned by DELETE: `data` is always an empty object."""
    success: bool = True
    data: Dict[str, str] = Field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    """
    Error response format for every failing request.

    Example:
        {"success": false, "message": "Blog not found"}
    """
    success: bool = False
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
