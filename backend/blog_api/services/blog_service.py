"""
Blog API — Blog Service (Business Logic)
=========================================

What:  One method per CRUD action over blog posts.
Why:   Keeps the outcome mapping (absent → NotFoundError, schema failure →
       ValidationError, anything else → DatabaseError) out of the routes.
How:   Each call builds a BlogRepository on the request's session and
       performs exactly one store operation.

Identifier policy:
    Identifiers are UUIDs. A path value that does not parse as a UUID can
    never match a record, so it is reported exactly like a missing record
    (404) on read, update and delete.
"""

import logging
from datetime import date
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.exceptions import BlogApiError, DatabaseError, NotFoundError
from blog_api.repositories.blog_repository import BlogRepository
from blog_api.schemas.blog import BlogCreate, BlogResponse, extract_blog_edits

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "anonymous"

BLOG_NOT_FOUND = "Blog not found"
BLOG_NOT_EDITABLE = "Blog cannot be edited because it was not found"


def format_publication_date(today: Optional[date] = None) -> str:
    """Short en-US date without zero padding, e.g. 3/7/2026."""
    today = today or date.today()
    return f"{today.month}/{today.day}/{today.year}"


def parse_blog_id(raw_id: Any) -> Optional[UUID]:
    """Return the UUID for a path identifier, or None if it is malformed."""
    if isinstance(raw_id, UUID):
        return raw_id
    try:
        return UUID(str(raw_id))
    except ValueError:
        return None


def _store_failure(action: str, exc: Exception) -> DatabaseError:
    logger.error("Database error while %s: %s", action, str(exc), exc_info=True)
    return DatabaseError(
        message=str(exc) or type(exc).__name__,
        context={"action": action, "error_type": type(exc).__name__},
    )


class BlogService:
    """
    Business logic layer for blog operations.

    Stateless: the session arrives with each call, so one instance serves
    every request.
    """

    async def list_blogs(self, db: AsyncSession) -> List[BlogResponse]:
        """All stored blogs; an empty store gives an empty list."""
        try:
            blogs = await BlogRepository(db).find_all()
            return [BlogResponse.model_validate(blog) for blog in blogs]
        except BlogApiError:
            raise
        except Exception as e:
            raise _store_failure("listing blogs", e)

    async def create_blog(self, db: AsyncSession, payload: BlogCreate) -> BlogResponse:
        """
        Create a blog post.

        `author` falls back to "anonymous" only when the body omits it;
        any supplied value, null included, goes to the store unchanged.

        Raises:
            ValidationError: the store rejected a field (→ 400)
            DatabaseError: any other store failure (→ 500)
        """
        author = payload.author if payload.author_supplied else DEFAULT_AUTHOR
        try:
            blog = await BlogRepository(db).insert(
                title=payload.title,
                content=payload.content,
                author=author,
                publication_date=format_publication_date(),
            )
            logger.info("Blog created: %s", blog.id)
            return BlogResponse.model_validate(blog)
        except BlogApiError:
            raise
        except Exception as e:
            raise _store_failure("creating blog", e)

    async def get_blog(self, db: AsyncSession, blog_id: Any) -> BlogResponse:
        """
        Raises:
            NotFoundError: no blog with this id, or the id is malformed (→ 404)
        """
        uid = parse_blog_id(blog_id)
        if uid is None:
            raise NotFoundError(message=BLOG_NOT_FOUND, resource_id=str(blog_id))
        try:
            blog = await BlogRepository(db).find_by_id(uid)
        except Exception as e:
            raise _store_failure("fetching blog", e)
        if blog is None:
            raise NotFoundError(message=BLOG_NOT_FOUND, resource_id=str(blog_id))
        return BlogResponse.model_validate(blog)

    async def update_blog(self, db: AsyncSession, blog_id: Any, body: Any) -> BlogResponse:
        """
        Apply the whitelisted edits from `body` and return the updated blog.

        Only string values for title/content/author are applied; every other
        key, and every wrong-typed value, is ignored. An empty edit set is a
        no-op that still returns the blog.

        Raises:
            NotFoundError: no blog with this id (→ 404)
            ValidationError: an edit breaks the schema, e.g. empty title (→ 400)
        """
        uid = parse_blog_id(blog_id)
        if uid is None:
            raise NotFoundError(message=BLOG_NOT_EDITABLE, resource_id=str(blog_id))
        edits = extract_blog_edits(body)
        try:
            blog = await BlogRepository(db).update_by_id(uid, edits)
        except BlogApiError:
            raise
        except Exception as e:
            raise _store_failure("updating blog", e)
        if blog is None:
            raise NotFoundError(message=BLOG_NOT_EDITABLE, resource_id=str(blog_id))
        logger.info("Blog %s updated: %s", uid, sorted(edits))
        return BlogResponse.model_validate(blog)

    async def delete_blog(self, db: AsyncSession, blog_id: Any) -> None:
        """
        Raises:
            NotFoundError: no blog with this id, including an already deleted one (→ 404)
        """
        uid = parse_blog_id(blog_id)
        if uid is None:
            raise NotFoundError(message=BLOG_NOT_FOUND, resource_id=str(blog_id))
        try:
            deleted = await BlogRepository(db).delete_by_id(uid)
        except Exception as e:
            raise _store_failure("deleting blog", e)
        if deleted is None:
            raise NotFoundError(message=BLOG_NOT_FOUND, resource_id=str(blog_id))
        logger.info("Blog deleted: %s", uid)


blog_service = BlogService()
