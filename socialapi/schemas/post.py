"""Post schemas."""

from datetime import datetime

from socialapi.schemas.common import APIModel


class CreatorSummary(APIModel):
    """Minimal view of a post's owner."""

    id: int
    name: str


class PostResponse(APIModel):
    """Post with its creator joined in."""

    id: int
    title: str
    content: str
    image_url: str
    creator: CreatorSummary
    created_at: datetime
    updated_at: datetime


class PostListResponse(APIModel):
    """One page of the feed plus the total for client-side pagination."""

    message: str
    posts: list[PostResponse]
    total_items: int


class PostCreateResponse(APIModel):
    message: str
    post: PostResponse
    creator: CreatorSummary


class PostSingleResponse(APIModel):
    message: str
    post: PostResponse


class UploadResponse(APIModel):
    """Result of a standalone image upload."""

    message: str
    file_path: str | None = None
