"""Post model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from socialapi.database import Base
from socialapi.models.mixins import TimestampMixin


class Post(Base, TimestampMixin):
    """A post in the feed, owned by exactly one user."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=False)  # "images/<file>"
    creator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    creator = relationship("User", back_populates="posts")
