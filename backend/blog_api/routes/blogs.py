"""
Blog API — Blog Route Handlers
===============================

What:  The five CRUD endpoints under /api/blogs.
How:   Extract path/body, delegate to BlogService, set the success status.
       Failures are raised by the service and rendered by the exception
       handlers in main.py, so every request gets exactly one response.

Route Inventory:
    GET    /api/blogs        → 200 list
    POST   /api/blogs        → 201 created record
    GET    /api/blogs/{id}   → 200 record
    PATCH  /api/blogs/{id}   → 200 updated record
    DELETE /api/blogs/{id}   → 204 empty
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db_session
from blog_api.schemas.blog import BlogCreate, BlogResponse, ErrorResponse
from blog_api.services.blog_service import blog_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blogs", tags=["Blogs"])

_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Blog not found", "model": ErrorResponse}}
_INVALID = {400: {"description": "Blog failed validation", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[BlogResponse],
    responses={**_SERVER_ERROR},
    summary="List all blogs",
)
@router.get("/", response_model=List[BlogResponse], include_in_schema=False)
async def list_blogs(db: AsyncSession = Depends(get_db_session)) -> List[BlogResponse]:
    return await blog_service.list_blogs(db)


@router.post(
    "",
    response_model=BlogResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_INVALID, **_SERVER_ERROR},
    summary="Create a blog",
    description=(
        "Creates a blog from `title`, `content` and an optional `author` "
        "(defaults to \"anonymous\"). `publication_date` is set to today's date."
    ),
)
@router.post(
    "/",
    response_model=BlogResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_blog(
    payload: Optional[BlogCreate] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> BlogResponse:
    return await blog_service.create_blog(db, payload or BlogCreate())


@router.get(
    "/{blog_id}",
    response_model=BlogResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a blog by id",
)
async def get_blog(blog_id: str, db: AsyncSession = Depends(get_db_session)) -> BlogResponse:
    return await blog_service.get_blog(db, blog_id)


@router.patch(
    "/{blog_id}",
    response_model=BlogResponse,
    responses={**_INVALID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Partially update a blog",
    description=(
        "Applies string values for `title`, `content` and `author`; any other "
        "key or non-string value is ignored."
    ),
)
async def update_blog(
    blog_id: str,
    body: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> BlogResponse:
    return await blog_service.update_blog(db, blog_id, body or {})


@router.delete(
    "/{blog_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a blog",
)
async def delete_blog(blog_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    await blog_service.delete_blog(db, blog_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
