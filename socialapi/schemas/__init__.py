"""Pydantic schemas for API requests and responses."""

from socialapi.schemas.auth import (
    LoginResponse,
    SignupResponse,
    StatusResponse,
    StatusUpdate,
    UserLogin,
    UserSignup,
)
from socialapi.schemas.common import APIModel, MessageResponse
from socialapi.schemas.post import (
    CreatorSummary,
    PostCreateResponse,
    PostListResponse,
    PostResponse,
    PostSingleResponse,
    UploadResponse,
)

__all__ = [
    "APIModel",
    "MessageResponse",
    "UserSignup",
    "UserLogin",
    "SignupResponse",
    "LoginResponse",
    "StatusResponse",
    "StatusUpdate",
    "CreatorSummary",
    "PostResponse",
    "PostListResponse",
    "PostCreateResponse",
    "PostSingleResponse",
    "UploadResponse",
]
