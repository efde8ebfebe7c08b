"""Auth API router: POST /api/login, /api/register, /api/logout."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from oil_model_server.api.dependencies import (
    get_bearer_token,
    get_credential_store,
    get_session_store,
)
from oil_model_server.domain.schemas.auth import CredentialsRequest, LoginData
from oil_model_server.domain.schemas.envelope import ok
from oil_model_server.security.session_store import CredentialStore, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login")
async def login(
    body: CredentialsRequest,
    sessions: Annotated[SessionStore, Depends(get_session_store)],
):
    """Issue a new session token. Earlier tokens of the same user stay valid."""
    token = sessions.login(body.username, body.password)
    logger.info("user_logged_in", extra={"username": body.username})
    data = LoginData(token=token, username=body.username)
    return ok("Login successful", data.model_dump())


@router.post("/register")
async def register(
    body: CredentialsRequest,
    credentials: Annotated[CredentialStore, Depends(get_credential_store)],
):
    """Add a user. Does not log the user in."""
    credentials.register(body.username, body.password)
    logger.info("user_registered", extra={"username": body.username})
    return ok("Registration successful. Please login.")


@router.post("/logout")
async def logout(
    token: Annotated[str, Depends(get_bearer_token)],
    sessions: Annotated[SessionStore, Depends(get_session_store)],
):
    """Drop the caller's token. Always succeeds."""
    sessions.logout(token)
    return ok("Logged out")
