"""GraphQL schema over the shared service layer."""

from ariadne import make_executable_schema

from socialapi.graphql_api.errors import format_graphql_error
from socialapi.graphql_api.resolvers import datetime_scalar, mutation, query
from socialapi.graphql_api.type_defs import type_defs

schema = make_executable_schema(
    type_defs,
    query,
    mutation,
    datetime_scalar,
    convert_names_case=True,
)

__all__ = ["schema", "format_graphql_error"]
