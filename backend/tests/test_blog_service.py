"""
Blog API — Blog Service Unit Tests
===================================

What:  Tests for BlogService outcome mapping.
How:   Store behaviour comes from the in-memory database fixture; store
       failures are injected with a mock session.

What we test:
    ✅ author defaulting and publication_date stamping on create
    ✅ NotFoundError with action-specific messages (including malformed ids)
    ✅ Store failures (including commit failures) wrapped in DatabaseError
       carrying the original message
"""

from datetime import date
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from blog_api.exceptions import DatabaseError, NotFoundError, ValidationError
from blog_api.schemas.blog import BlogCreate
from blog_api.services.blog_service import (
    BLOG_NOT_EDITABLE,
    BLOG_NOT_FOUND,
    BlogService,
    format_publication_date,
    parse_blog_id,
)


class TestHelpers:

    def test_format_publication_date_has_no_padding(self):
        assert format_publication_date(date(2026, 3, 7)) == "3/7/2026"

    def test_format_publication_date_two_digit_parts(self):
        assert format_publication_date(date(2025, 12, 25)) == "12/25/2025"

    def test_format_publication_date_defaults_to_today(self):
        assert format_publication_date() == format_publication_date(date.today())

    def test_parse_blog_id_valid(self):
        uid = uuid4()
        assert parse_blog_id(str(uid)) == uid
        assert parse_blog_id(uid) == uid

    @pytest.mark.parametrize("raw", ["0123456789", "non-existent", "", "zzzz"])
    def test_parse_blog_id_malformed(self, raw):
        assert parse_blog_id(raw) is None


class TestBlogServiceCreate:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_author_defaults_to_anonymous(self, db_session):
        result = await self.service.create_blog(
            db_session, BlogCreate(title="Something", content="someone wrote this")
        )
        assert result.author == "anonymous"
        assert result.publication_date == format_publication_date()

    @pytest.mark.asyncio
    async def test_supplied_author_kept(self, db_session):
        result = await self.service.create_blog(
            db_session, BlogCreate(title="T", content="C", author="Jane")
        )
        assert result.author == "Jane"

    @pytest.mark.asyncio
    async def test_explicit_null_author_not_defaulted(self, db_session):
        with pytest.raises(ValidationError, match="author"):
            await self.service.create_blog(
                db_session, BlogCreate(title="T", content="C", author=None)
            )

    @pytest.mark.asyncio
    async def test_missing_content_is_validation_error(self, db_session):
        with pytest.raises(ValidationError, match="content"):
            await self.service.create_blog(db_session, BlogCreate(title="T"))

    @pytest.mark.asyncio
    async def test_store_failure_is_database_error(self, mock_db_session):
        mock_db_session.flush = AsyncMock(side_effect=RuntimeError("connection refused"))
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_blog(
                mock_db_session, BlogCreate(title="T", content="C")
            )
        assert exc_info.value.message == "connection refused"
        assert exc_info.value.context["error_type"] == "RuntimeError"

    @pytest.mark.asyncio
    async def test_commit_failure_is_database_error(self, mock_db_session):
        mock_db_session.commit = AsyncMock(side_effect=RuntimeError("commit failed"))
        with pytest.raises(DatabaseError, match="commit failed"):
            await self.service.create_blog(
                mock_db_session, BlogCreate(title="T", content="C")
            )


class TestBlogServiceRead:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_list_empty(self, db_session):
        assert await self.service.list_blogs(db_session) == []

    @pytest.mark.asyncio
    async def test_get_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_blog(db_session, str(uuid4()))
        assert exc_info.value.message == BLOG_NOT_FOUND

    @pytest.mark.asyncio
    async def test_get_malformed_id_not_found(self, mock_db_session):
        """Malformed ids never reach the store."""
        with pytest.raises(NotFoundError):
            await self.service.get_blog(mock_db_session, "0123456789")
        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_found(self, db_session):
        created = await self.service.create_blog(
            db_session, BlogCreate(title="TEST", content="TEST CONTENT")
        )
        fetched = await self.service.get_blog(db_session, str(created.id))
        assert fetched.id == created.id
        assert fetched.title == "TEST"

    @pytest.mark.asyncio
    async def test_list_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=OSError("network unreachable"))
        with pytest.raises(DatabaseError, match="network unreachable"):
            await self.service.list_blogs(mock_db_session)

    @pytest.mark.asyncio
    async def test_get_store_failure(self, mock_db_session):
        mock_db_session.get = AsyncMock(side_effect=RuntimeError("timeout"))
        with pytest.raises(DatabaseError, match="timeout"):
            await self.service.get_blog(mock_db_session, str(uuid4()))


class TestBlogServiceUpdate:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_update_partial(self, db_session):
        created = await self.service.create_blog(
            db_session, BlogCreate(title="Original", content="Original Content")
        )
        updated = await self.service.update_blog(
            db_session, str(created.id), {"title": "Updated", "publication_date": "1/1/1970"}
        )
        assert updated.title == "Updated"
        assert updated.content == "Original Content"
        assert updated.publication_date == created.publication_date

    @pytest.mark.asyncio
    async def test_update_not_found_message(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_blog(db_session, str(uuid4()), {"title": "x"})
        assert exc_info.value.message == BLOG_NOT_EDITABLE

    @pytest.mark.asyncio
    async def test_update_malformed_id(self, db_session):
        with pytest.raises(NotFoundError, match="cannot be edited"):
            await self.service.update_blog(db_session, "non-existent", {"title": "x"})

    @pytest.mark.asyncio
    async def test_update_empty_title_is_validation_error(self, db_session):
        created = await self.service.create_blog(
            db_session, BlogCreate(title="T", content="C")
        )
        with pytest.raises(ValidationError):
            await self.service.update_blog(db_session, str(created.id), {"title": ""})

    @pytest.mark.asyncio
    async def test_update_store_failure(self, mock_db_session):
        mock_db_session.get = AsyncMock(side_effect=RuntimeError("connection reset"))
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.update_blog(
                mock_db_session, str(uuid4()), {"title": "x"}
            )
        assert exc_info.value.message == "connection reset"
        assert exc_info.value.context["error_type"] == "RuntimeError"


class TestBlogServiceDelete:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_delete_then_delete_again(self, db_session):
        created = await self.service.create_blog(
            db_session, BlogCreate(title="T", content="C")
        )
        await self.service.delete_blog(db_session, str(created.id))
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.delete_blog(db_session, str(created.id))
        assert exc_info.value.message == BLOG_NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_store_failure(self, mock_db_session):
        mock_db_session.get = AsyncMock(side_effect=RuntimeError("disk I/O error"))
        with pytest.raises(DatabaseError, match="disk I/O error"):
            await self.service.delete_blog(mock_db_session, str(uuid4()))
