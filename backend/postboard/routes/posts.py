"""
Postboard Backend — Post Route Handlers
=========================================

What:  GET/POST /api/posts and PUT/DELETE /api/posts/{post_id}.
How:   FastAPI validates the JSON body against PostPayload, the store comes
       from get_post_store(), and PostService does the single store call.
       Errors are raised, never returned; the global handlers in main.py
       turn them into 400/404/500 responses.
Who:   Called by browser UIs and PostsClient.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from postboard.schemas.post import (
    ErrorResponse,
    MessageResponse,
    PostPayload,
    PostRecord,
)
from postboard.services.post_service import post_service
from postboard.services.post_store import PostStore, get_post_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Posts"])


@router.get(
    "/posts",
    response_model=List[PostRecord],
    responses={
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="List all posts",
)
async def list_posts(
    store: PostStore = Depends(get_post_store),
) -> List[PostRecord]:
    """Every stored post, in store order. An empty store gives []."""
    return await post_service.list_posts(store)


@router.post(
    "/posts",
    status_code=201,
    response_model=PostRecord,
    responses={
        400: {"description": "Missing or invalid title/content", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Create a post",
)
async def create_post(
    payload: PostPayload,
    store: PostStore = Depends(get_post_store),
) -> PostRecord:
    """Create a post from {title, content}; responds 201 with the stored record."""
    return await post_service.create_post(store, payload)


@router.put(
    "/posts/{post_id}",
    response_model=PostRecord,
    responses={
        400: {"description": "Missing or invalid title/content", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Replace a post's title and content",
)
async def update_post(
    post_id: str,
    payload: PostPayload,
    store: PostStore = Depends(get_post_store),
) -> PostRecord:
    """
    Update a post in place.

    post_id is taken as a plain string; ids that are not UUIDs simply match
    nothing and produce a 404 instead of FastAPI's 422.
    """
    return await post_service.update_post(store, post_id, payload)


@router.delete(
    "/posts/{post_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Post not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Delete a post",
)
async def delete_post(
    post_id: str,
    store: PostStore = Depends(get_post_store),
) -> MessageResponse:
    await post_service.delete_post(store, post_id)
    return MessageResponse(message="Post deleted successfully")
