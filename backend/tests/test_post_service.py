"""
Postboard Backend — Post Service Unit Tests
=============================================

What:  Tests for PostService outcome mapping.
How:   Uses mock_post_store (AsyncMock); no database involved.

What we test:
    ✅ Results are passed through unchanged
    ✅ Not-found from the store becomes NotFoundError
    ✅ StoreError propagates untouched
"""

import pytest

from postboard.exceptions import NotFoundError, StoreError
from postboard.schemas.post import PostPayload, PostRecord
from postboard.services.post_service import PostService

POST_ID = "0b6f3f0e-7d0c-4a3e-9a4e-6d3c2b1a0f9e"


class TestPostServiceList:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_list_posts_passes_through(self, mock_post_store):
        records = [
            PostRecord(id=POST_ID, title="t", content="c"),
        ]
        mock_post_store.list_all.return_value = records

        result = await self.service.list_posts(mock_post_store)

        assert result == records
        mock_post_store.list_all.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_posts_store_error(self, mock_post_store):
        mock_post_store.list_all.side_effect = StoreError()

        with pytest.raises(StoreError):
            await self.service.list_posts(mock_post_store)


class TestPostServiceCreate:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_create_post(self, mock_post_store):
        mock_post_store.create.return_value = PostRecord(id=POST_ID, title="T", content="C")

        result = await self.service.create_post(
            mock_post_store, PostPayload(title="T", content="C")
        )

        assert result.id == POST_ID
        mock_post_store.create.assert_awaited_once_with(title="T", content="C")


class TestPostServiceUpdate:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_update_post_found(self, mock_post_store):
        mock_post_store.update.return_value = PostRecord(id=POST_ID, title="n", content="m")

        result = await self.service.update_post(
            mock_post_store, POST_ID, PostPayload(title="n", content="m")
        )

        assert result.title == "n"
        mock_post_store.update.assert_awaited_once_with(POST_ID, title="n", content="m")

    @pytest.mark.asyncio
    async def test_update_post_not_found(self, mock_post_store):
        mock_post_store.update.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_post(
                mock_post_store, POST_ID, PostPayload(title="n", content="m")
            )
        assert exc_info.value.context["resource_id"] == POST_ID


class TestPostServiceDelete:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_delete_post_found(self, mock_post_store):
        mock_post_store.delete.return_value = True

        assert await self.service.delete_post(mock_post_store, POST_ID) is None

    @pytest.mark.asyncio
    async def test_delete_post_not_found(self, mock_post_store):
        mock_post_store.delete.return_value = False

        with pytest.raises(NotFoundError):
            await self.service.delete_post(mock_post_store, POST_ID)

    @pytest.mark.asyncio
    async def test_delete_post_store_error(self, mock_post_store):
        mock_post_store.delete.side_effect = StoreError(context={"operation": "delete"})

        with pytest.raises(StoreError):
            await self.service.delete_post(mock_post_store, POST_ID)
