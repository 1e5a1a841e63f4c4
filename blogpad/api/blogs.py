"""Blog API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from blogpad.api.dependencies import get_blog_service, get_current_user
from blogpad.exceptions import NotFoundError
from blogpad.models.enums import BlogStatus
from blogpad.models.user import User
from blogpad.schemas.blog import BlogCreate, BlogResponse, BlogUpdate, MessageResponse
from blogpad.services.blog_service import BlogService

router = APIRouter(prefix="/blogs", tags=["blogs"])

CurrentUser = Annotated[User, Depends(get_current_user)]
Blogs = Annotated[BlogService, Depends(get_blog_service)]


@router.get("", response_model=list[BlogResponse])
async def list_blogs(current_user: CurrentUser, blogs: Blogs):
    """Get all of the current user's blogs, most recently updated first."""
    return blogs.list_by_author(current_user.id)


# Registered ahead of /{blog_id} so "search" is never captured as an id
@router.get("/search", response_model=list[BlogResponse])
async def search_blogs(
    query: Annotated[str, Query(min_length=1)],
    current_user: CurrentUser,
    blogs: Blogs,
):
    """Search the current user's blogs by id, title or content."""
    return blogs.search(current_user.id, query)


@router.post("/save-draft", response_model=BlogResponse, status_code=status.HTTP_201_CREATED)
async def save_draft(blog_data: BlogCreate, current_user: CurrentUser, blogs: Blogs):
    """Create a new draft."""
    return blogs.create(
        current_user.id,
        blog_data.title,
        blog_data.content,
        blog_data.tags,
        BlogStatus.DRAFT,
    )


@router.post("/publish", response_model=BlogResponse, status_code=status.HTTP_201_CREATED)
async def publish(blog_data: BlogCreate, current_user: CurrentUser, blogs: Blogs):
    """Create a new published blog."""
    return blogs.create(
        current_user.id,
        blog_data.title,
        blog_data.content,
        blog_data.tags,
        BlogStatus.PUBLISHED,
    )


@router.get("/{blog_id}", response_model=BlogResponse)
async def get_blog(blog_id: str, current_user: CurrentUser, blogs: Blogs):
    """Get a specific blog."""
    return blogs.get_owned(blog_id, current_user.id)


@router.put("/{blog_id}", response_model=BlogResponse)
async def update_blog(
    blog_id: str,
    blog_data: BlogUpdate,
    current_user: CurrentUser,
    blogs: Blogs,
):
    """Partially update a blog."""
    blogs.get_owned(blog_id, current_user.id)

    updated = blogs.update(blog_id, blog_data.changes())
    if updated is None:
        raise NotFoundError("Blog")
    return updated


@router.delete("/{blog_id}", response_model=MessageResponse)
async def delete_blog(blog_id: str, current_user: CurrentUser, blogs: Blogs):
    """Delete a blog."""
    blogs.get_owned(blog_id, current_user.id)

    if not blogs.delete(blog_id):
        raise NotFoundError("Blog")
    return MessageResponse(message="Blog deleted successfully")
