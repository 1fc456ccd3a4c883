"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from socialapi.database import get_db
from socialapi.services.auth import identity_from_token
from socialapi.services.feed import FeedService
from socialapi.services.guards import ANONYMOUS, Identity, require_auth

# Missing credentials are not an error here; require_auth decides per route
security = HTTPBearer(auto_error=False)


def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity:
    """Resolve the bearer token, if any, into the request identity."""
    if credentials is None:
        return ANONYMOUS
    return identity_from_token(credentials.credentials)


def get_current_user_id(
    identity: Annotated[Identity, Depends(get_identity)],
) -> int:
    """Get the authenticated user id or fail with 401."""
    return require_auth(identity)


def get_feed_service(
    db: Annotated[Session, Depends(get_db)],
) -> FeedService:
    """Get feed service with dependencies."""
    return FeedService(db)
