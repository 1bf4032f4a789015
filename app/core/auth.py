"""
@file: auth.py
@description:
This module implements authentication and authorization for the PickResults API.
It provides:
- Creating and validating JWT bearer tokens with scopes
- Getting the current authenticated user
- An admin-scope dependency for moderation routes
- A shared-secret check for the scheduler-facing sync endpoint

@dependencies:
- jose: For JWT token encoding/decoding
- datetime: For token expiration management
- fastapi.security: For bearer token extraction and scopes
- pydantic: For data validation
- app.core.config: For configuration settings
- app.core.logger: For component-specific logging

@notes:
- Tokens are issued by the main application; this service only validates them.
  create_access_token mints tokens with the same secret and algorithm for the
  test suite and for operators who need a token by hand; no route calls it.
- JWT tokens carry the user ID in `sub`, optional scopes, and an expiration time.
- The sync endpoint is not user-facing; it is protected by CRON_SECRET instead
  of a JWT and is open when CRON_SECRET is unset.
"""

import hmac
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, List

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer, OAuth2PasswordBearer, SecurityScopes
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.core.logger import setup_logger

# Create a component-specific logger
logger = setup_logger("app.core.auth")

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/v1/auth/login",
    scopes={
        "picks": "Read picks",
        "admin": "Full administrative access"
    }
)

# auto_error=False so a missing header can be allowed when no secret is configured
cron_scheme = HTTPBearer(auto_error=False)


class TokenData(BaseModel):
    """Schema for data encoded in the JWT token."""
    user_id: Optional[str] = None
    scopes: List[str] = []


class User(BaseModel):
    """Basic user schema with authentication fields."""
    id: str
    is_active: bool = True
    is_admin: bool = False


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token with the provided data and expiration.

    Used by the tests and internal tooling; production tokens come from the
    main application.

    Args:
        data: Dictionary of data to encode in the token
        expires_delta: Optional expiration time delta, defaults to settings value

    Returns:
        str: The encoded JWT token
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + settings.ACCESS_TOKEN_EXPIRE_DELTA

    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(
        to_encode,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM
    )

    logger.debug(f"Created access token for user_id: {data.get('sub')}")
    return encoded_jwt


async def get_current_user(
    security_scopes: SecurityScopes,
    token: str = Depends(oauth2_scheme)
) -> User:
    """
    Get the current user from a JWT token.

    Args:
        security_scopes: Security scopes required for the endpoint
        token: The JWT token to decode

    Returns:
        User: The authenticated user

    Raises:
        HTTPException: 401 if the token is invalid, 403 if a required scope is missing
    """
    if security_scopes.scopes:
        authenticate_value = f'Bearer scope="{security_scopes.scope_str}"'
    else:
        authenticate_value = "Bearer"

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": authenticate_value},
    )

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM]
        )

        user_id: str = payload.get("sub")
        if user_id is None:
            logger.warning("Token is missing user_id (sub claim)")
            raise credentials_exception

        token_scopes = payload.get("scopes", [])
        token_data = TokenData(user_id=user_id, scopes=token_scopes)

    except (JWTError, ValidationError) as e:
        logger.warning(f"Token validation failed: {str(e)}")
        raise credentials_exception

    user = User(
        id=token_data.user_id,
        is_active=True,
        is_admin="admin" in token_data.scopes
    )

    for scope in security_scopes.scopes:
        if scope not in token_data.scopes:
            logger.warning(f"User {user_id} does not have required scope: {scope}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions",
                headers={"WWW-Authenticate": authenticate_value},
            )

    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Verify that the current user is active.

    Raises:
        HTTPException: If the user is inactive
    """
    if not current_user.is_active:
        logger.warning(f"Inactive user attempted access: {current_user.id}")
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user


async def require_admin(
    current_user: User = Security(get_current_user, scopes=["admin"])
) -> User:
    """Dependency for routes restricted to the admin scope."""
    return current_user


async def verify_cron_secret(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(cron_scheme)
) -> None:
    """
    Check the scheduler's shared secret on the sync endpoint.

    The request must carry `Authorization: Bearer <CRON_SECRET>`. When
    CRON_SECRET is not configured every request is allowed.

    Raises:
        HTTPException: 401 if a secret is configured and does not match
    """
    expected = settings.CRON_SECRET
    if not expected:
        return

    provided = credentials.credentials if credentials is not None else ""
    if not hmac.compare_digest(provided.encode(), expected.encode()):
        logger.warning("Rejected sync request with missing or invalid cron secret")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
