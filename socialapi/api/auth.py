"""Authentication and user status API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from socialapi.api.dependencies import get_current_user_id
from socialapi.database import get_db
from socialapi.schemas.auth import (
    LoginResponse,
    SignupResponse,
    StatusResponse,
    StatusUpdate,
    UserLogin,
    UserSignup,
)
from socialapi.schemas.common import MessageResponse
from socialapi.services import auth as auth_service

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    user = auth_service.signup(db, user_data.email, user_data.name, user_data.password)
    return SignupResponse(message="User created!", user_id=user.id)


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    token, user = auth_service.login(db, credentials.email, credentials.password)
    return LoginResponse(token=token, user_id=user.id)


@router.get("/status", response_model=StatusResponse)
def get_status(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the current user's status."""
    return StatusResponse(status=auth_service.get_user_status(db, user_id))


@router.patch("/status", response_model=MessageResponse)
def update_status(
    status_data: StatusUpdate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the current user's status."""
    auth_service.update_user_status(db, user_id, status_data.status)
    return MessageResponse(message="User updated.")
