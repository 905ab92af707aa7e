"""
Postboard Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between clients and backend.
How:   FastAPI validates request bodies against PostPayload, serializes
       PostRecord responses, and builds the OpenAPI docs from both.
Who:   Routes, PostStore (as its return type) and PostsClient (to parse
       responses).

Wire format of a post:
    {"_id": "4f0c...", "title": "Hello", "content": "World"}

The identifier is `id` in Python and `_id` on the wire, the key existing
clients of this API read.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostPayload(BaseModel):
    """
    Body of POST /api/posts and PUT /api/posts/{post_id}.

    Both fields must be present and be strings. Values are stored verbatim:
    no trimming, no length limits. Unknown keys (including `_id`) are ignored,
    so an update can never rewrite the identifier.
    """
    title: str = Field(description="Post title")
    content: str = Field(description="Post body text")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostRecord(BaseModel):
    """
    What:  A stored post as returned by every read or write operation.
    Who:   Produced by PostStore, returned by the list/create/update routes,
           parsed back by PostsClient.
    """
    id: str = Field(alias="_id", description="Store-assigned identifier (UUID string)")
    title: str = Field(description="Post title")
    content: str = Field(description="Post body text")

    # populate_by_name: PostStore builds records with id=..., clients send _id
    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    """Plain confirmation body, e.g. after a delete."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every failing endpoint.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which fields failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
