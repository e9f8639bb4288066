"""
FastAPI dependencies: database session and caller identity.

Security:
- Bearer token HMAC signature and age are verified on every request
- The token's user must still exist
- Admin routes additionally require the admin role
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

import config
from db import get_db_session
from exceptions import AuthenticationException, AuthorizationException
from models.user import UserDTO
from services.user import UserService
from utils.access_token import validate_access_token, AccessTokenError
from utils.permission_utils import is_admin

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_db_session() as session:
        yield session


async def get_current_user(
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
        session: AsyncSession = Depends(get_session)) -> UserDTO:
    if credentials is None or not credentials.credentials:
        raise AuthenticationException()

    try:
        claims = validate_access_token(credentials.credentials, config.AUTH_TOKEN_SECRET,
                                       config.AUTH_TOKEN_MAX_AGE_SECONDS)
    except AccessTokenError as e:
        logger.info(f"Rejected access token: {e}")
        raise AuthenticationException()

    user = await UserService.get_by_id(claims.user_id, session)
    if user is None:
        logger.info(f"Access token for unknown user {claims.user_id}")
        raise AuthenticationException()
    return user


async def require_admin(user: UserDTO = Depends(get_current_user)) -> UserDTO:
    if not is_admin(user):
        logger.warning(f"User {user.id} denied access to an admin route")
        raise AuthorizationException(f"User role {user.role.value} is not authorized to access this route")
    return user
