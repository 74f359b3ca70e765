# company_api/dependencies.py
import logging
from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from company_api.database import get_db  # noqa: F401  re-exported for routers
from company_api.exceptions import UnauthorizedError
from company_api.schemas.auth import AuthenticatedUser
from company_api.security import decode_access_token
from company_api.services.assets import AssetUploader
from company_api.services.identity import IdentityProvider

logger = logging.getLogger(__name__)

# auto_error is off so a missing header produces our own 401 envelope
security = HTTPBearer(auto_error=False)


# =============================================================================
# AUTHENTICATION
# =============================================================================

def decode_token(token: str) -> dict:
    """
    Decode a bearer token issued by /api/auth/login.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        UnauthorizedError: If the token is expired, tampered with or malformed
    """
    try:
        return decode_access_token(token)
    except jwt.ExpiredSignatureError:
        logger.warning("Token has expired")
        raise UnauthorizedError("Invalid or expired token")
    except jwt.PyJWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise UnauthorizedError("Invalid or expired token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthenticatedUser:
    """
    Resolve the caller from the Authorization header.

    The token is trusted as issued: no user lookup is made per request.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing Authorization token")

    payload = decode_token(credentials.credentials)

    user_id = payload.get("id")
    email = payload.get("email")
    if not isinstance(user_id, int) or not email:
        raise UnauthorizedError("Invalid or expired token")

    return AuthenticatedUser(id=user_id, email=email)


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

def get_identity_provider(request: Request) -> IdentityProvider:
    """Identity provider chosen at startup"""
    return request.app.state.identity_provider


def get_asset_uploader(request: Request) -> AssetUploader:
    """Image host chosen at startup"""
    return request.app.state.asset_uploader
