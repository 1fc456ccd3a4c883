"""Feed API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from socialapi.api.dependencies import get_current_user_id, get_feed_service
from socialapi.schemas.common import MessageResponse
from socialapi.schemas.post import (
    CreatorSummary,
    PostCreateResponse,
    PostListResponse,
    PostResponse,
    PostSingleResponse,
)
from socialapi.services.feed import FeedService
from socialapi.services.images import clear_image, save_image

router = APIRouter(prefix="/feed", tags=["feed"])


def _store_upload(image: UploadFile | None) -> str | None:
    if image is None or not image.filename:
        return None
    return save_image(image.file, image.filename)


@router.get("/posts", response_model=PostListResponse)
def get_posts(
    feed: Annotated[FeedService, Depends(get_feed_service)],
    page: int = Query(default=1, ge=1),
):
    """Get one page of posts, newest first."""
    result = feed.list_posts(page)
    return PostListResponse(
        message="Fetched posts successfully.",
        posts=[PostResponse.model_validate(post) for post in result.posts],
        total_items=result.total_items,
    )


@router.post("/post", response_model=PostCreateResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    user_id: Annotated[int, Depends(get_current_user_id)],
    feed: Annotated[FeedService, Depends(get_feed_service)],
    title: Annotated[str, Form()] = "",
    content: Annotated[str, Form()] = "",
    image: Annotated[UploadFile | None, File()] = None,
):
    """Create a post from a multipart form with an image file."""
    image_url = _store_upload(image)
    try:
        post = feed.create_post(title, content, image_url, user_id)
    except Exception:
        clear_image(image_url)
        raise

    return PostCreateResponse(
        message="Post created successfully!",
        post=PostResponse.model_validate(post),
        creator=CreatorSummary.model_validate(post.creator),
    )


@router.get("/post/{post_id}", response_model=PostSingleResponse)
def get_post(
    post_id: int,
    feed: Annotated[FeedService, Depends(get_feed_service)],
):
    """Get a specific post."""
    post = feed.get_post(post_id)
    return PostSingleResponse(message="Post fetched.", post=PostResponse.model_validate(post))


@router.put("/post/{post_id}", response_model=PostSingleResponse)
def update_post(
    post_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    feed: Annotated[FeedService, Depends(get_feed_service)],
    title: Annotated[str, Form()] = "",
    content: Annotated[str, Form()] = "",
    image_url: Annotated[str | None, Form(alias="imageUrl")] = None,
    image: Annotated[UploadFile | None, File()] = None,
):
    """Update a post; a new image file replaces ``imageUrl``."""
    uploaded = _store_upload(image)
    try:
        post = feed.update_post(post_id, title, content, uploaded or image_url or "", user_id)
    except Exception:
        clear_image(uploaded)
        raise

    return PostSingleResponse(message="Post updated!", post=PostResponse.model_validate(post))


@router.delete("/post/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    feed: Annotated[FeedService, Depends(get_feed_service)],
):
    """Delete a post (owner only)."""
    feed.delete_post(post_id, user_id)
    return MessageResponse(message="Successfully deleted post.")
