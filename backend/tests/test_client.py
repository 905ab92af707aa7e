"""
Postboard Backend — PostsClient Tests
=======================================

What:  Drives the API through PostsClient the way a UI would.
How:   PostsClient gets an ASGITransport into test_app; no sockets.
"""

import uuid

import pytest
from httpx import ASGITransport

from postboard.client import PostsClient, PostsClientError
from postboard.main import create_app


@pytest.fixture
def posts_client(test_app):
    return PostsClient("http://test", transport=ASGITransport(app=test_app))


class TestPostsClient:

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, posts_client):
        async with posts_client as client:
            assert await client.list_posts() == []

            created = await client.create_post("Draft", "Body")
            assert created.title == "Draft"

            updated = await client.update_post(created.id, "Final", "Body v2")
            assert updated is not None
            assert updated.id == created.id
            assert updated.content == "Body v2"

            assert [p.title for p in await client.list_posts()] == ["Final"]

            assert await client.delete_post(created.id) is True
            assert await client.list_posts() == []

    @pytest.mark.asyncio
    async def test_unknown_id(self, posts_client):
        async with posts_client as client:
            missing = str(uuid.uuid4())
            assert await client.update_post(missing, "t", "c") is None
            assert await client.delete_post(missing) is False

    @pytest.mark.asyncio
    async def test_server_error_raises(self, test_settings, mock_post_store):
        from postboard.exceptions import StoreError

        mock_post_store.list_all.side_effect = StoreError()
        app = create_app(test_settings)
        app.state.post_store = mock_post_store

        async with PostsClient("http://test", transport=ASGITransport(app=app)) as client:
            with pytest.raises(PostsClientError) as exc_info:
                await client.list_posts()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Server error"
