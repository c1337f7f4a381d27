"""
Blog API: Blog Route Handlers
=============================

What:  The six /api/blogs endpoints.
How:   Each endpoint pulls its parameters out of the request, calls
       BlogService and wraps the result in the success envelope. Errors
       raised by the service are turned into the error envelope by the
       handlers in main.py.

The endpoints are bound to (method, path) pairs by the explicit BLOG_ROUTES
table at the bottom of this module rather than by decorators, so the whole
HTTP surface is readable in one place.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db_session
from blog_api.schemas.blog import (
    BlogEnvelope,
    BlogListEnvelope,
    BlogTitlePatch,
    BlogWrite,
    EmptyEnvelope,
    ErrorEnvelope,
)
from blog_api.services.blog_service import blog_service


async def list_blogs(
    response: Response,
    # Raw strings: non-numeric input falls back to defaults instead of a 422
    page: Optional[str] = Query(default=None, description="Page number, 1-based (default 1)"),
    limit: Optional[str] = Query(default=None, description="Items per page (default 10)"),
    db: AsyncSession = Depends(get_db_session),
) -> BlogListEnvelope:
    """
    List blogs with offset pagination.

    Example:
        GET /api/blogs?page=2&limit=10
        → {"success": true, "data": [...],
           "pagination": {"next": {"page": 3, "limit": 10}, "prev": {"page": 1, "limit": 10}}}
    """
    result = await blog_service.list_blogs(db=db, page=page, limit=limit)
    response.headers["X-Total-Count"] = str(result.total_count)
    return BlogListEnvelope(data=result.data, pagination=result.pagination)


async def get_blog(
    blog_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> BlogEnvelope:
    blog = await blog_service.get_blog(db=db, blog_id=blog_id)
    return BlogEnvelope(data=blog)


async def create_blog(
    payload: Optional[BlogWrite] = None,
    db: AsyncSession = Depends(get_db_session),
) -> BlogEnvelope:
    payload = payload or BlogWrite()
    blog = await blog_service.create_blog(db=db, title=payload.title, content=payload.content)
    return BlogEnvelope(data=blog)


async def replace_blog(
    blog_id: str,
    payload: Optional[BlogWrite] = None,
    db: AsyncSession = Depends(get_db_session),
) -> BlogEnvelope:
    """Full update. Fields left out of the body keep their stored values."""
    payload = payload or BlogWrite()
    blog = await blog_service.replace_blog(
        db=db, blog_id=blog_id, title=payload.title, content=payload.content
    )
    return BlogEnvelope(data=blog)


async def rename_blog(
    blog_id: str,
    payload: Optional[BlogTitlePatch] = None,
    db: AsyncSession = Depends(get_db_session),
) -> BlogEnvelope:
    payload = payload or BlogTitlePatch()
    blog = await blog_service.rename_blog(db=db, blog_id=blog_id, title=payload.title)
    return BlogEnvelope(data=blog)


async def delete_blog(
    blog_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> EmptyEnvelope:
    await blog_service.delete_blog(db=db, blog_id=blog_id)
    return EmptyEnvelope()


# ── Route Table ───────────────────────────────────────────────────────────
# (method, path, endpoint, success status, response model, documented failures)
BLOG_ROUTES = (
    ("GET", "/blogs", list_blogs, 200, BlogListEnvelope, (500,)),
    ("GET", "/blogs/{blog_id}", get_blog, 200, BlogEnvelope, (404, 500)),
    ("POST", "/blogs", create_blog, 201, BlogEnvelope, (400, 500)),
    ("PUT", "/blogs/{blog_id}", replace_blog, 200, BlogEnvelope, (400, 404, 500)),
    ("PATCH", "/blogs/{blog_id}", rename_blog, 200, BlogEnvelope, (400, 404, 500)),
    ("DELETE", "/blogs/{blog_id}", delete_blog, 200, EmptyEnvelope, (404, 500)),
)

router = APIRouter(prefix="/api", tags=["Blogs"])

for method, path, endpoint, status_code, response_model, failures in BLOG_ROUTES:
    router.add_api_route(
        path,
        endpoint,
        methods=[method],
        status_code=status_code,
        response_model=response_model,
        # Drops absent pagination links, so a single page serializes as {}
        response_model_exclude_none=True,
        responses={code: {"model": ErrorEnvelope} for code in failures},
    )
