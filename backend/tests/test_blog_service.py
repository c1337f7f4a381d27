"""
Blog API: Blog Service Unit Tests
=================================

What:  Tests for BlogService validation, not-found handling and error conversion.
How:   Uses a mock AsyncSession (no real DB).

What we test:
    ✅ Presence validation happens before any query
    ✅ Missing rows and malformed ids raise NotFoundError
    ✅ PUT applies only the fields that were sent
    ✅ Delete reads before deleting
    ✅ Storage exceptions become ServerError with a generic message
    ✅ Timestamps come out as UTC, and a new blog gets one for both fields
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from sqlalchemy.exc import OperationalError

from blog_api.exceptions import NotFoundError, ServerError, ValidationError
from blog_api.schemas.blog import BlogResponse
from blog_api.services.blog_service import BlogService


def make_blog(data):
    blog = MagicMock()
    for key, value in data.items():
        setattr(blog, key, value)
    return blog


def found(blog):
    result = MagicMock()
    result.scalar_one_or_none.return_value = blog
    return result


class TestBlogServiceList:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_list_blogs_empty(self, mock_db_session):
        count_result = MagicMock()
        count_result.scalar.return_value = 0
        rows_result = MagicMock()
        rows_result.scalars.return_value.all.return_value = []
        mock_db_session.execute = AsyncMock(side_effect=[count_result, rows_result])

        result = await self.service.list_blogs(mock_db_session)

        assert result.data == []
        assert result.total_count == 0
        assert result.pagination.next is None
        assert result.pagination.prev is None

    @pytest.mark.asyncio
    async def test_list_blogs_last_page(self, mock_db_session, sample_blog_data):
        blogs = [
            make_blog({**sample_blog_data, "id": uuid4(), "title": f"Blog {i}"})
            for i in range(5)
        ]
        count_result = MagicMock()
        count_result.scalar.return_value = 25
        rows_result = MagicMock()
        rows_result.scalars.return_value.all.return_value = blogs
        mock_db_session.execute = AsyncMock(side_effect=[count_result, rows_result])

        result = await self.service.list_blogs(mock_db_session, page="3", limit="10")

        assert [b.title for b in result.data] == [f"Blog {i}" for i in range(5)]
        assert result.total_count == 25
        assert result.pagination.next is None
        assert result.pagination.prev.page == 2
        assert result.pagination.prev.limit == 10

    @pytest.mark.asyncio
    async def test_list_blogs_storage_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT count(*)", {}, Exception("connection refused"))
        )

        with pytest.raises(ServerError) as exc_info:
            await self.service.list_blogs(mock_db_session)

        assert exc_info.value.message == "Server Error"
        assert isinstance(exc_info.value.__cause__, OperationalError)


class TestBlogServiceGet:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_get_blog_found(self, mock_db_session, sample_blog_data):
        mock_db_session.execute.return_value = found(make_blog(sample_blog_data))

        result = await self.service.get_blog(mock_db_session, str(sample_blog_data["id"]))

        assert result.id == sample_blog_data["id"]
        assert result.title == sample_blog_data["title"]
        assert result.content == sample_blog_data["content"]

    @pytest.mark.asyncio
    async def test_get_blog_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = found(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_blog(mock_db_session, str(uuid4()))

        assert exc_info.value.message == "Blog not found"

    @pytest.mark.asyncio
    async def test_get_blog_malformed_id_is_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_blog(mock_db_session, "not-a-uuid")

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_blog_unexpected_error_is_server_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("driver exploded"))

        with pytest.raises(ServerError) as exc_info:
            await self.service.get_blog(mock_db_session, str(uuid4()))

        assert "driver exploded" not in exc_info.value.message
        assert exc_info.value.context["operation"] == "get_blog"


class TestBlogServiceCreate:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title, content",
        [(None, "body"), ("", "body"), ("Title", None), ("Title", ""), (None, None)],
    )
    async def test_create_blog_requires_both_fields(self, mock_db_session, title, content):
        with pytest.raises(ValidationError, match="Title and content are required"):
            await self.service.create_blog(mock_db_session, title, content)

        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_blog_success(self, mock_db_session):
        new_id = uuid4()

        async def fake_refresh(blog):
            # Stands in for the defaults the database round-trip would assign
            blog.id = new_id
            blog.created_at = datetime.now(timezone.utc)
            blog.updated_at = blog.created_at

        mock_db_session.refresh = AsyncMock(side_effect=fake_refresh)

        result = await self.service.create_blog(mock_db_session, "Title", "Body")

        assert result.id == new_id
        assert result.title == "Title"
        assert result.content == "Body"
        mock_db_session.add.assert_called_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_blog_uses_one_timestamp(self, mock_db_session):
        async def fake_refresh(blog):
            blog.id = uuid4()

        mock_db_session.refresh = AsyncMock(side_effect=fake_refresh)

        await self.service.create_blog(mock_db_session, "Title", "Body")

        added = mock_db_session.add.call_args.args[0]
        assert added.created_at is added.updated_at
        assert added.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_create_blog_commit_failure(self, mock_db_session):
        mock_db_session.commit = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("disk full")))

        with pytest.raises(ServerError):
            await self.service.create_blog(mock_db_session, "Title", "Body")


class TestBlogServiceUpdate:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_replace_blog_requires_one_field(self, mock_db_session):
        with pytest.raises(ValidationError, match="Title or content is required"):
            await self.service.replace_blog(mock_db_session, str(uuid4()), None, "")

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_replace_blog_applies_only_sent_fields(self, mock_db_session, sample_blog_data):
        blog = make_blog(sample_blog_data)
        mock_db_session.execute.return_value = found(blog)

        result = await self.service.replace_blog(
            mock_db_session, str(sample_blog_data["id"]), None, "New body"
        )

        assert result.content == "New body"
        assert result.title == sample_blog_data["title"]
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_replace_blog_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = found(None)

        with pytest.raises(NotFoundError):
            await self.service.replace_blog(mock_db_session, str(uuid4()), "Title", "Body")

        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rename_blog_requires_title(self, mock_db_session):
        with pytest.raises(ValidationError, match="Title is required"):
            await self.service.rename_blog(mock_db_session, str(uuid4()), "")

    @pytest.mark.asyncio
    async def test_rename_blog_updates_title_only(self, mock_db_session, sample_blog_data):
        blog = make_blog(sample_blog_data)
        mock_db_session.execute.return_value = found(blog)

        result = await self.service.rename_blog(
            mock_db_session, str(sample_blog_data["id"]), "Renamed"
        )

        assert result.title == "Renamed"
        assert result.content == sample_blog_data["content"]

    @pytest.mark.asyncio
    async def test_replace_blog_commit_failure(self, mock_db_session, sample_blog_data):
        mock_db_session.execute.return_value = found(make_blog(sample_blog_data))
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("UPDATE blogs", {}, Exception("deadlock detected"))
        )

        with pytest.raises(ServerError) as exc_info:
            await self.service.replace_blog(
                mock_db_session, str(sample_blog_data["id"]), "Title", None
            )

        assert exc_info.value.message == "Server Error"
        assert exc_info.value.context["operation"] == "replace_blog"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_rename_blog_query_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection reset"))
        )

        with pytest.raises(ServerError) as exc_info:
            await self.service.rename_blog(mock_db_session, str(uuid4()), "Renamed")

        assert exc_info.value.context["operation"] == "rename_blog"
        assert isinstance(exc_info.value.__cause__, OperationalError)
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rename_blog_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = found(None)

        with pytest.raises(NotFoundError):
            await self.service.rename_blog(mock_db_session, str(uuid4()), "Renamed")


class TestBlogServiceDelete:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_delete_blog_reads_then_deletes(self, mock_db_session, sample_blog_data):
        blog = make_blog(sample_blog_data)
        mock_db_session.execute.return_value = found(blog)

        await self.service.delete_blog(mock_db_session, str(sample_blog_data["id"]))

        mock_db_session.execute.assert_awaited_once()
        mock_db_session.delete.assert_awaited_once_with(blog)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_blog_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = found(None)

        with pytest.raises(NotFoundError):
            await self.service.delete_blog(mock_db_session, str(uuid4()))

        mock_db_session.delete.assert_not_awaited()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_blog_storage_failure(self, mock_db_session, sample_blog_data):
        blog = make_blog(sample_blog_data)
        mock_db_session.execute.return_value = found(blog)
        mock_db_session.delete = AsyncMock(side_effect=RuntimeError("lock timeout"))

        with pytest.raises(ServerError) as exc_info:
            await self.service.delete_blog(mock_db_session, str(sample_blog_data["id"]))

        assert "lock timeout" not in exc_info.value.message
        assert exc_info.value.context["operation"] == "delete_blog"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        mock_db_session.commit.assert_not_awaited()


class TestBlogResponseTimestamps:

    def test_naive_timestamps_are_read_as_utc(self, sample_blog_data):
        naive = datetime(2024, 5, 1, 12, 30)
        blog = make_blog({**sample_blog_data, "created_at": naive, "updated_at": naive})

        result = BlogResponse.model_validate(blog)

        assert result.created_at == naive.replace(tzinfo=timezone.utc)
        assert result.updated_at.utcoffset() == timedelta(0)

    def test_offset_timestamps_are_converted_to_utc(self, sample_blog_data):
        local = datetime(2024, 5, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))
        blog = make_blog({**sample_blog_data, "created_at": local, "updated_at": local})

        result = BlogResponse.model_validate(blog)

        assert result.created_at.tzinfo == timezone.utc
        assert result.created_at.hour == 12
