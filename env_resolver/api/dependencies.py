"""
API Dependencies - Shared utilities for API endpoints.
"""

from typing import Iterator, Optional

from fastapi import Header, HTTPException

import env_resolver.constants as CONSTANTS
from env_resolver.core.context import ResolutionContext
from env_resolver.core.exceptions import (
    EnvironmentNotFoundError,
    InvalidInputError,
    ResolutionError,
)
from env_resolver.core.factory import create_resolver
from env_resolver.logger import logger, print_stack_trace
from env_resolver.resolver import EnvironmentResolver


def get_resolver() -> Iterator[EnvironmentResolver]:
    """
    Create a fresh resolver per request and close its catalog connection
    once the response has been produced.
    """
    resolver = create_resolver()
    try:
        yield resolver
    finally:
        resolver.catalog.close()


def get_identity(
    identity: Optional[str] = Header(None, alias=CONSTANTS.IDENTITY_HEADER)
) -> Optional[str]:
    """Return the calling user's entity ref, if the caller supplied one."""
    return identity


def get_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Extract the catalog token from an "Authorization: Bearer ..." header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Authorization header must use the Bearer scheme")
    return token.strip()


def build_context(environment_ref: str, identity: Optional[str], token: Optional[str]) -> ResolutionContext:
    """
    Build a ResolutionContext, turning invalid input into a 422 response.
    """
    try:
        return ResolutionContext(environment_ref, identity=identity, token=token)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))


def raise_http_error(error: Exception):
    """
    Map a resolution failure onto an HTTPException.

    Only the message distinguishes failure kinds for the caller; the status
    code only separates "environment not found" from everything else.
    """
    if isinstance(error, EnvironmentNotFoundError):
        raise HTTPException(status_code=404, detail=str(error))
    if isinstance(error, InvalidInputError):
        raise HTTPException(status_code=422, detail=str(error))
    if isinstance(error, ResolutionError):
        logger.error(str(error))
        raise HTTPException(status_code=500, detail=str(error))

    print_stack_trace()
    logger.error(str(error))
    raise HTTPException(status_code=500, detail="Internal server error")
