# futurehire/api/v1/deps.py
"""
Auth Gate and service accessors for route handlers.

``authenticate`` is a pure function of the Authorization header and the
token service: no store lookup, no state change. ``get_current_identity``
wraps it as a FastAPI dependency for protected routes.
"""
import logging
from typing import Optional

from fastapi import Depends, Header, Request
from fastapi.security.utils import get_authorization_scheme_param
from pydantic import BaseModel

from futurehire.core.errors import ExpiredToken, InvalidToken, Unauthenticated
from futurehire.core.security import TokenService
from futurehire.repositories.users import CredentialStore
from futurehire.services.auth import AuthService
from futurehire.services.records import UserRecordService
from futurehire.services.resume_analysis import ResumeAnalyzer

logger = logging.getLogger(__name__)


class AuthContext(BaseModel):
    identity_id: str


def authenticate(authorization: Optional[str], tokens: TokenService) -> AuthContext:
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token:
        raise Unauthenticated()
    try:
        identity_id = tokens.verify(token)
    except (InvalidToken, ExpiredToken) as exc:
        logger.info("Rejected bearer token: %s", exc.kind.value)
        raise
    return AuthContext(identity_id=identity_id)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens

def get_store(request: Request) -> CredentialStore:
    return request.app.state.store

def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth

def get_record_service(request: Request) -> UserRecordService:
    return request.app.state.records

def get_resume_analyzer(request: Request) -> ResumeAnalyzer:
    return request.app.state.resume_analyzer


async def get_current_identity(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    ctx = authenticate(authorization, tokens)
    request.state.identity_id = ctx.identity_id
    return ctx
