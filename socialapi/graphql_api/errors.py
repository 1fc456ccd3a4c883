"""Shape GraphQL errors like REST ones: a numeric ``code`` and optional ``data``."""

import logging

from ariadne import format_error, unwrap_graphql_error
from graphql import GraphQLError

from socialapi.errors import AppError

logger = logging.getLogger(__name__)


def format_graphql_error(error: GraphQLError, debug: bool = False) -> dict:
    """Ariadne ``error_formatter`` adding ``code``/``data`` from service errors."""
    formatted = format_error(error, debug)
    original = unwrap_graphql_error(error)

    if original is None:
        # Syntax or schema validation problem in the query itself
        return formatted

    if isinstance(original, AppError):
        formatted["message"] = original.message
        formatted["code"] = original.status_code
        if original.data:
            formatted["data"] = original.data
        return formatted

    logger.error(f"Unhandled exception in resolver: {original}", exc_info=original)
    formatted["code"] = 500
    if not debug:
        formatted["message"] = "An unexpected error occurred."
    return formatted
