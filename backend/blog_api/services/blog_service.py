"""
Blog API: Blog Service (Resource Handler)
=========================================

What:  The six blog operations: list, get, create, full update, partial
       update and delete.
How:   Each call receives the request's AsyncSession, validates input,
       runs its queries inside `_storage_errors`, commits its own writes
       and returns response schemas.
Who:   Called by the route handlers in routes/blogs.py.

Error Handling Strategy:
    - Presence validation runs before any query → ValidationError (400)
    - A missing row (or an id that is not a UUID) → NotFoundError (404)
    - Anything else raised by SQLAlchemy or the driver is logged with its
      traceback and converted to ServerError (500) by `_storage_errors`.
      This is the only place storage exceptions are translated.

Validation asymmetry:
    create_blog requires title AND content; replace_blog requires title OR
    content and applies only the fields that were sent.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.exceptions import BlogApiError, NotFoundError, ServerError, ValidationError
from blog_api.models.blog import Blog, utc_now
from blog_api.schemas.blog import BlogPage, BlogResponse
from blog_api.services.pagination import PageWindow, build_pagination

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _storage_errors(operation: str, **context) -> AsyncIterator[None]:
    """Converts unexpected storage exceptions raised in the block into ServerError."""
    try:
        yield
    except BlogApiError:
        raise
    except Exception as e:
        logger.error("Storage error during %s: %s", operation, str(e), exc_info=True)
        raise ServerError(
            context={"operation": operation, "error_type": type(e).__name__, **context},
        ) from e


def _parse_blog_id(blog_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(blog_id)
    except (TypeError, ValueError):
        return None


class BlogService:
    """
    Stateless operations on the `blogs` table.

    Responsibilities:
        - list_blogs():    offset pagination in insertion order
        - get_blog():      single blog by id
        - create_blog():   insert with both fields required
        - replace_blog():  PUT semantics (at least one field)
        - rename_blog():   PATCH semantics (title only)
        - delete_blog():   existence check, then delete
    """

    async def _load(self, db: AsyncSession, blog_id: str) -> Blog:
        """Fetches a blog row or raises NotFoundError."""
        parsed_id = _parse_blog_id(blog_id)
        if parsed_id is None:
            raise NotFoundError(resource="Blog", resource_id=blog_id)

        result = await db.execute(select(Blog).where(Blog.id == parsed_id))
        blog = result.scalar_one_or_none()
        if blog is None:
            raise NotFoundError(resource="Blog", resource_id=blog_id)
        return blog

    async def list_blogs(
        self,
        db: AsyncSession,
        page: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> BlogPage:
        """
        One page of blogs plus links to the neighbouring pages.

        `page` and `limit` are the raw query strings; see
        services/pagination.py for the parsing rules.

        Two queries, count first:
            SELECT count(*) FROM blogs
            SELECT * FROM blogs ORDER BY created_at, id OFFSET :start LIMIT :limit
        """
        window = PageWindow.from_query(page, limit)

        async with _storage_errors("list_blogs", page=window.page, limit=window.limit):
            count_result = await db.execute(select(func.count()).select_from(Blog))
            total_count = count_result.scalar() or 0

            query = (
                select(Blog)
                .order_by(Blog.created_at, Blog.id)
                .offset(window.start_index)
                .limit(window.limit)
            )
            result = await db.execute(query)
            blogs = list(result.scalars().all())

        return BlogPage(
            data=[BlogResponse.model_validate(blog) for blog in blogs],
            pagination=build_pagination(window, total_count),
            total_count=total_count,
        )

    async def get_blog(self, db: AsyncSession, blog_id: str) -> BlogResponse:
        """
        Raises:
            NotFoundError: No blog with this id (→ 404)
            ServerError:   Query execution failed (→ 500)
        """
        async with _storage_errors("get_blog", blog_id=blog_id):
            blog = await self._load(db, blog_id)
        return BlogResponse.model_validate(blog)

    async def create_blog(
        self,
        db: AsyncSession,
        title: Optional[str],
        content: Optional[str],
    ) -> BlogResponse:
        """
        Inserts a new blog.

        Raises:
            ValidationError: title or content missing/empty (→ 400)
            ServerError:     Insert failed (→ 500)
        """
        if not title or not content:
            raise ValidationError(message="Title and content are required")

        async with _storage_errors("create_blog"):
            now = utc_now()
            blog = Blog(title=title, content=content, created_at=now, updated_at=now)
            db.add(blog)
            await db.commit()
            await db.refresh(blog)

        logger.info("Blog created: %s", blog.id)
        return BlogResponse.model_validate(blog)

    async def replace_blog(
        self,
        db: AsyncSession,
        blog_id: str,
        title: Optional[str],
        content: Optional[str],
    ) -> BlogResponse:
        """
        Full update: applies whichever of title/content was sent.

        Raises:
            ValidationError: both title and content missing/empty (→ 400)
            NotFoundError:   No blog with this id (→ 404)
            ServerError:     Update failed (→ 500)
        """
        if not title and not content:
            raise ValidationError(message="Title or content is required")

        async with _storage_errors("replace_blog", blog_id=blog_id):
            blog = await self._load(db, blog_id)
            if title:
                blog.title = title
            if content:
                blog.content = content
            await db.commit()
            await db.refresh(blog)

        logger.info("Blog updated: %s", blog.id)
        return BlogResponse.model_validate(blog)

    async def rename_blog(
        self,
        db: AsyncSession,
        blog_id: str,
        title: Optional[str],
    ) -> BlogResponse:
        """
        Partial update of the title only.

        Raises:
            ValidationError: title missing/empty (→ 400)
            NotFoundError:   No blog with this id (→ 404)
            ServerError:     Update failed (→ 500)
        """
        if not title:
            raise ValidationError(message="Title is required", field="title")

        async with _storage_errors("rename_blog", blog_id=blog_id):
            blog = await self._load(db, blog_id)
            blog.title = title
            await db.commit()
            await db.refresh(blog)

        logger.info("Blog renamed: %s", blog.id)
        return BlogResponse.model_validate(blog)

    async def delete_blog(self, db: AsyncSession, blog_id: str) -> None:
        """
        Deletes a blog after confirming it exists (two round-trips).

        Raises:
            NotFoundError: No blog with this id (→ 404)
            ServerError:   Delete failed (→ 500)
        """
        async with _storage_errors("delete_blog", blog_id=blog_id):
            blog = await self._load(db, blog_id)
            await db.delete(blog)
            await db.commit()

        logger.info("Blog deleted: %s", blog_id)


# Stateless; one instance is shared by all requests
blog_service = BlogService()
