"""
Postboard Backend — Async API Client
======================================

What:  httpx-based client for the /api/posts endpoints.
Who:   Scripts, other services, and the test suite. It sends the same
       requests a browser UI does: JSON {title, content} bodies, `_id`
       identifiers in paths.

Outcome mapping:
    2xx                  → PostRecord / list / True
    404 on update/delete → None / False
    anything else        → PostsClientError(status_code, message)

Usage:
    async with PostsClient("http://localhost:5000") as client:
        post = await client.create_post("Hello", "World")
        await client.update_post(post.id, "Hello", "Again")
        await client.delete_post(post.id)
"""

import logging
from typing import Any, List, Optional

import httpx

from postboard.schemas.post import PostRecord

logger = logging.getLogger(__name__)


class PostsClientError(Exception):
    """Non-success response from the posts API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class PostsClient:
    """
    Async client for the posts API.

    Args:
        base_url: Server root, e.g. "http://localhost:5000"
        transport: Optional httpx transport (ASGITransport in tests)
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "PostsClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def list_posts(self) -> List[PostRecord]:
        response = await self._http.get("/api/posts")
        self._raise_for_status(response)
        return [PostRecord.model_validate(item) for item in response.json()]

    async def create_post(self, title: str, content: str) -> PostRecord:
        response = await self._http.post(
            "/api/posts", json={"title": title, "content": content}
        )
        self._raise_for_status(response)
        return PostRecord.model_validate(response.json())

    async def update_post(self, post_id: str, title: str, content: str) -> Optional[PostRecord]:
        """Updated record, or None if the server has no post with post_id."""
        response = await self._http.put(
            f"/api/posts/{post_id}", json={"title": title, "content": content}
        )
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return PostRecord.model_validate(response.json())

    async def delete_post(self, post_id: str) -> bool:
        """True if deleted, False if the server has no post with post_id."""
        response = await self._http.delete(f"/api/posts/{post_id}")
        if response.status_code == 404:
            return False
        self._raise_for_status(response)
        return True

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            message = response.json().get("message", response.reason_phrase)
        except (ValueError, AttributeError):
            message = response.text or response.reason_phrase
        logger.warning(
            "%s %s failed with %d: %s",
            response.request.method,
            response.request.url.path,
            response.status_code,
            message,
        )
        raise PostsClientError(response.status_code, message)
