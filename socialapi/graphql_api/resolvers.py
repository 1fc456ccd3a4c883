"""GraphQL resolvers.

Thin adapters: each resolver checks authentication, converts arguments and
delegates to the same services the REST routers use. Errors propagate to the
executor and are shaped by ``format_graphql_error``.
"""

from datetime import datetime
from typing import Any

from ariadne import MutationType, QueryType, ScalarType
from graphql import GraphQLResolveInfo

from socialapi.errors import NotFoundError
from socialapi.services import auth as auth_service
from socialapi.services.feed import FeedService
from socialapi.services.guards import require_auth

# Clients send this literal when the image was not changed
UNCHANGED_IMAGE = "undefined"

query = QueryType()
mutation = MutationType()
datetime_scalar = ScalarType("DateTime")


@datetime_scalar.serializer
def serialize_datetime(value: datetime) -> str:
    return value.isoformat()


def _parse_id(value: Any, kind: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise NotFoundError(f"Could not find {kind}.") from e


def _feed(info: GraphQLResolveInfo) -> FeedService:
    return FeedService(info.context["db"])


# --- Users ---


@mutation.field("createUser")
def resolve_create_user(_, info: GraphQLResolveInfo, user_input: dict):
    return auth_service.signup(
        info.context["db"],
        user_input["email"],
        user_input["name"],
        user_input["password"],
    )


@mutation.field("login")
def resolve_login(_, info: GraphQLResolveInfo, email: str, password: str):
    token, user = auth_service.login(info.context["db"], email, password)
    return {"token": token, "user_id": str(user.id)}


@query.field("user")
def resolve_user(_, info: GraphQLResolveInfo):
    user_id = require_auth(info.context["identity"])
    return auth_service.get_user(info.context["db"], user_id)


@mutation.field("updateStatus")
def resolve_update_status(_, info: GraphQLResolveInfo, status: str):
    user_id = require_auth(info.context["identity"])
    return auth_service.update_user_status(info.context["db"], user_id, status)


# --- Posts ---


@query.field("posts")
def resolve_posts(_, info: GraphQLResolveInfo, page: int | None = None):
    require_auth(info.context["identity"])
    # A missing or zero page means the first one
    result = _feed(info).list_posts(page or 1)
    return {"posts": result.posts, "total_posts": result.total_items}


@query.field("post")
def resolve_post(_, info: GraphQLResolveInfo, id: str):
    require_auth(info.context["identity"])
    return _feed(info).get_post(_parse_id(id, "post"))


@mutation.field("createPost")
def resolve_create_post(_, info: GraphQLResolveInfo, post_input: dict):
    user_id = require_auth(info.context["identity"])
    return _feed(info).create_post(
        post_input["title"],
        post_input["content"],
        post_input["image_url"],
        user_id,
    )


@mutation.field("updatePost")
def resolve_update_post(_, info: GraphQLResolveInfo, id: str, post_input: dict):
    user_id = require_auth(info.context["identity"])
    image_url = post_input["image_url"]
    if image_url == UNCHANGED_IMAGE:
        image_url = None
    return _feed(info).update_post(
        _parse_id(id, "post"),
        post_input["title"],
        post_input["content"],
        image_url,
        user_id,
    )


@mutation.field("deletePost")
def resolve_delete_post(_, info: GraphQLResolveInfo, id: str):
    user_id = require_auth(info.context["identity"])
    _feed(info).delete_post(_parse_id(id, "post"), user_id)
    return True
