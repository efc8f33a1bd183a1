"""
Snippets API — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract.
How:   Request bodies are validated with `model_validate`; responses are
       serialized with `model_dump(mode="json")`.

Design Decision:
    Request models declare every field optional. Required-field rules for
    create (non-empty title/code/language) are enforced by the snippet
    service so the client gets the fixed "Missing required fields" message
    rather than a field-level validation report. Unknown keys, notably a
    client-supplied `user_id`, are ignored.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SnippetCreate(BaseModel):
    """Body of POST {api}. title, code and language are checked by the service."""

    title: Optional[str] = None
    description: Optional[str] = None
    code: Optional[str] = None
    language: Optional[str] = None
    tags: Optional[List[str]] = None
    is_public: Optional[bool] = None

    model_config = {"extra": "ignore"}


class SnippetUpdate(BaseModel):
    """
    Body of PUT {api}/{id}.

    Only keys present in the JSON body are applied
    (`model_dump(exclude_unset=True)`); an explicit null is applied as null
    and left for the store's NOT NULL constraints to reject.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    code: Optional[str] = None
    language: Optional[str] = None
    tags: Optional[List[str]] = None
    is_public: Optional[bool] = None

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProfileSummary(BaseModel):
    """Owner's profile fields surfaced on every snippet."""

    username: Optional[str] = None
    avatar_url: Optional[str] = None


class SnippetResponse(BaseModel):
    """
    What:  Full representation of a snippet joined with its owner's profile.
    Who:   Element of every `data` payload.

    `profiles` is null when the owner has no profile row (left-outer join).
    """

    id: uuid.UUID = Field(description="Server-assigned identifier")
    title: str
    description: Optional[str] = None
    code: str
    language: str
    tags: List[str] = Field(default_factory=list)
    is_public: bool = True
    user_id: uuid.UUID = Field(description="Owner reference")
    created_at: datetime = Field(description="Insert timestamp (UTC)")
    profiles: Optional[ProfileSummary] = None

    model_config = {"from_attributes": True}


class SnippetListResponse(BaseModel):
    data: List[SnippetResponse]
    count: int


class SnippetDataResponse(BaseModel):
    data: SnippetResponse


class SnippetMutationResponse(BaseModel):
    data: SnippetResponse
    message: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Every error body has exactly this shape."""

    error: str = Field(description="Client-safe error message")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
