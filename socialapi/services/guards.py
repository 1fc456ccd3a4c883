"""Precondition checks shared by the REST handlers and GraphQL resolvers.

Every guard raises immediately on the first problem it finds, except the
field validators, which collect all violations and raise once with the full
list in ``ValidationError.data``.
"""

from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email

from socialapi.errors import AuthError, ForbiddenError, NotFoundError, ValidationError

MIN_TITLE_LENGTH = 5
MIN_CONTENT_LENGTH = 5
MIN_PASSWORD_LENGTH = 5


@dataclass(frozen=True)
class Identity:
    """Who is making the request, as resolved from the bearer token."""

    user_id: int | None = None
    email: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS = Identity()


def require_auth(identity: Identity) -> int:
    """Return the authenticated user id or fail with 401."""
    if not identity.is_authenticated:
        raise AuthError("Not authenticated.")
    return identity.user_id  # type: ignore[return-value]


def require_found(entity: Any, kind: str) -> Any:
    """Return ``entity`` or fail with 404 when it is missing."""
    if entity is None:
        raise NotFoundError(f"Could not find {kind}.")
    return entity


def require_ownership(post: Any, user_id: int) -> None:
    """Fail with 403 unless ``user_id`` created ``post``.

    Works with a bare ``creator_id`` as well as an already-loaded ``creator``.
    """
    creator = getattr(post, "creator", None)
    creator_id = creator.id if creator is not None else post.creator_id
    if str(creator_id) != str(user_id):
        raise ForbiddenError("Not authorized.")


def _is_blank_or_short(value: str | None, min_length: int) -> bool:
    stripped = (value or "").strip()
    return not stripped or len(stripped) < min_length


def validate_post_fields(title: str | None, content: str | None) -> None:
    """Check title and content, reporting every violation at once."""
    errors = []
    if _is_blank_or_short(title, MIN_TITLE_LENGTH):
        errors.append({"field": "title", "message": "Title is invalid."})
    if _is_blank_or_short(content, MIN_CONTENT_LENGTH):
        errors.append({"field": "content", "message": "Content is invalid."})

    if errors:
        raise ValidationError("Validation failed, entered data is incorrect.", data=errors)


def validate_user_fields(email: str | None, password: str | None, name: str | None) -> str:
    """Validate signup input and return the normalized (lowercase) email."""
    errors = []
    normalized_email = (email or "").strip().lower()
    try:
        validate_email(normalized_email, check_deliverability=False)
    except EmailNotValidError:
        errors.append({"field": "email", "message": "Email is invalid."})

    if _is_blank_or_short(password, MIN_PASSWORD_LENGTH):
        errors.append({"field": "password", "message": "Password too short."})

    if not (name or "").strip():
        errors.append({"field": "name", "message": "Name is required."})

    if errors:
        raise ValidationError("Validation failed.", data=errors)
    return normalized_email
