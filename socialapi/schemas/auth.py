"""Authentication schemas.

Request bodies accept plain strings; field rules live in the service layer so
REST and GraphQL report identical validation errors.
"""

from pydantic import Field

from socialapi.schemas.common import APIModel


class UserSignup(APIModel):
    """User signup request."""

    email: str = Field(..., max_length=255)
    name: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class UserLogin(APIModel):
    """User login request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class SignupResponse(APIModel):
    message: str
    user_id: int


class LoginResponse(APIModel):
    """JWT issued on successful login."""

    token: str
    user_id: int


class StatusResponse(APIModel):
    status: str


class StatusUpdate(APIModel):
    status: str = Field(..., max_length=500)
