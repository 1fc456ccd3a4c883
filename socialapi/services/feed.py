"""Feed service: paginated listing and CRUD over posts.

Both the REST routers and the GraphQL resolvers go through this class, so the
business rules (validation, ownership, broadcast) exist in one place.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session, joinedload

from socialapi.errors import AuthError, ValidationError
from socialapi.models.post import Post
from socialapi.models.user import User
from socialapi.schemas.post import PostResponse
from socialapi.services.guards import (
    require_found,
    require_ownership,
    validate_post_fields,
)
from socialapi.services.images import clear_image, normalize_image_path
from socialapi.services.realtime import PostAction, publish_post_event

logger = logging.getLogger(__name__)

POSTS_PER_PAGE = 2


@dataclass
class PostPage:
    """One window of the feed."""

    posts: list[Post]
    total_items: int


def serialize_post(post: Post) -> dict:
    """JSON-ready representation used for broadcasts."""
    return PostResponse.model_validate(post).model_dump(mode="json", by_alias=True)


class FeedService:
    """Service for post-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_posts(self, page: int | None = None) -> PostPage:
        """Return a page of posts, newest first, with the total count."""
        if page is None:
            page = 1
        if page < 1:
            raise ValidationError(
                "Validation failed.", data=[{"field": "page", "message": "Page is invalid."}]
            )

        total_items = self.db.query(Post).count()
        posts = (
            self.db.query(Post)
            .options(joinedload(Post.creator))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset((page - 1) * POSTS_PER_PAGE)
            .limit(POSTS_PER_PAGE)
            .all()
        )
        return PostPage(posts=posts, total_items=total_items)

    def get_post(self, post_id: int) -> Post:
        """Get a single post or fail with 404."""
        post = (
            self.db.query(Post)
            .options(joinedload(Post.creator))
            .filter(Post.id == post_id)
            .first()
        )
        return require_found(post, "post")

    def create_post(self, title: str, content: str, image_url: str | None, user_id: int) -> Post:
        """Create a post owned by ``user_id`` and broadcast it."""
        validate_post_fields(title, content)
        if not image_url:
            raise ValidationError("No image provided.")

        user = self.db.get(User, user_id)
        if user is None:
            raise AuthError("Invalid user.")

        post = Post(
            title=title.strip(),
            content=content.strip(),
            image_url=normalize_image_path(image_url),
        )
        # Appending sets creator and persists both sides in one commit
        user.posts.append(post)
        self.db.commit()
        self.db.refresh(post)

        logger.info(f"Post created: id={post.id} user={user_id}")
        publish_post_event(PostAction.CREATE, serialize_post(post))
        return post

    def update_post(
        self,
        post_id: int,
        title: str,
        content: str,
        image_url: str | None,
        user_id: int,
    ) -> Post:
        """Update a post owned by ``user_id``.

        ``image_url=None`` keeps the current image; an empty string is an error.
        """
        validate_post_fields(title, content)
        if image_url is not None:
            image_url = normalize_image_path(image_url)
            if not image_url:
                raise ValidationError("No file picked.")

        post = self.get_post(post_id)
        require_ownership(post, user_id)

        old_image_url = post.image_url
        post.title = title.strip()
        post.content = content.strip()
        if image_url is not None:
            post.image_url = image_url
        self.db.commit()
        self.db.refresh(post)

        if post.image_url != old_image_url:
            clear_image(old_image_url)

        logger.info(f"Post updated: id={post.id} user={user_id}")
        publish_post_event(PostAction.UPDATE, serialize_post(post))
        return post

    def delete_post(self, post_id: int, user_id: int) -> None:
        """Delete a post owned by ``user_id`` and detach it from its owner."""
        post = self.get_post(post_id)
        require_ownership(post, user_id)

        image_url = post.image_url
        # delete-orphan cascade removes the row along with the list entry
        post.creator.posts.remove(post)
        self.db.commit()

        clear_image(image_url)

        logger.info(f"Post deleted: id={post_id} user={user_id}")
        publish_post_event(PostAction.DELETE, post_id)
