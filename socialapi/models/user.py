"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from socialapi.database import Base
from socialapi.models.mixins import TimestampMixin

DEFAULT_STATUS = "I am new!"


class User(Base, TimestampMixin):
    """User model for authentication and post ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    status = Column(String(500), nullable=False, default=DEFAULT_STATUS)

    # Owned posts in creation order; removing one from the list deletes it
    posts = relationship(
        "Post",
        back_populates="creator",
        order_by="Post.id",
        cascade="all, delete-orphan",
    )
