"""
Postboard Backend — Post Service
==================================

What:  Maps store outcomes for the four post operations onto API outcomes.
How:   Receives the PostStore for each call, performs exactly one store
       operation, converts "no such post" into NotFoundError, and logs writes.
Who:   Called by the route handlers in routes/posts.py.

Error mapping:
    PostStore result          → PostService behavior
    ─────────────────────────────────────────────────
    record / True             → returned as-is
    None / False (not found)  → NotFoundError (404)
    StoreError                → propagated untouched (500)

PostService holds no state, so the module-level `post_service` instance is
shared by all requests. The store is always passed in, never imported.
"""

import logging
from typing import List

from postboard.exceptions import NotFoundError
from postboard.schemas.post import PostPayload, PostRecord
from postboard.services.post_store import PostStore

logger = logging.getLogger(__name__)


class PostService:
    """Business logic layer for post operations."""

    async def list_posts(self, store: PostStore) -> List[PostRecord]:
        """Return every stored post."""
        posts = await store.list_all()
        logger.debug("Listed %d posts", len(posts))
        return posts

    async def create_post(self, store: PostStore, payload: PostPayload) -> PostRecord:
        """
        Persist a new post from a validated payload.

        Raises:
            StoreError: The insert failed or timed out (→ 500)
        """
        post = await store.create(title=payload.title, content=payload.content)
        logger.info("Created post %s", post.id)
        return post

    async def update_post(
        self, store: PostStore, post_id: str, payload: PostPayload
    ) -> PostRecord:
        """
        Replace title and content of an existing post.

        Raises:
            NotFoundError: No post with post_id (→ 404)
            StoreError: The update failed or timed out (→ 500)
        """
        post = await store.update(post_id, title=payload.title, content=payload.content)
        if post is None:
            logger.info("Update skipped: post %s not found", post_id)
            raise NotFoundError(resource="post", resource_id=post_id)

        logger.info("Updated post %s", post_id)
        return post

    async def delete_post(self, store: PostStore, post_id: str) -> None:
        """
        Remove a post permanently.

        Raises:
            NotFoundError: No post with post_id (→ 404)
            StoreError: The delete failed or timed out (→ 500)
        """
        deleted = await store.delete(post_id)
        if not deleted:
            logger.info("Delete skipped: post %s not found", post_id)
            raise NotFoundError(resource="post", resource_id=post_id)

        logger.info("Deleted post %s", post_id)


post_service = PostService()
