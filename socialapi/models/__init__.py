"""SQLAlchemy models."""

from socialapi.models.post import Post
from socialapi.models.user import User

__all__ = [
    "User",
    "Post",
]
