"""GraphQL HTTP endpoint."""

import json
import logging
from typing import Annotated

from ariadne import graphql_sync
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from socialapi.api.dependencies import get_identity
from socialapi.config import get_settings
from socialapi.database import get_db
from socialapi.graphql_api import format_graphql_error, schema
from socialapi.services.guards import Identity

logger = logging.getLogger(__name__)
settings = get_settings()
router = APIRouter(tags=["graphql"])


@router.post("/graphql")
async def graphql_endpoint(
    request: Request,
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Execute a GraphQL operation with the caller's identity in context."""
    try:
        data = await request.json()
    except json.JSONDecodeError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Request body must be valid JSON."},
        )

    # Resolvers are blocking (bcrypt, sync session); run them in the thread pool
    success, result = await run_in_threadpool(
        graphql_sync,
        schema,
        data,
        context_value={"request": request, "db": db, "identity": identity},
        error_formatter=format_graphql_error,
        debug=settings.is_development,
    )
    status_code = status.HTTP_200_OK if success else status.HTTP_400_BAD_REQUEST
    return JSONResponse(result, status_code=status_code)
