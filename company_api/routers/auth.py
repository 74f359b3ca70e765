# company_api/routers/auth.py
"""
Authentication Endpoints

- Register (provisions the identity, then stores the user)
- Login (returns a 90-day bearer token)
- Email and mobile verification flags
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from company_api.dependencies import get_db, get_identity_provider
from company_api.exceptions import BadRequestError
from company_api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    VerifyMobileRequest
)
from company_api.schemas.common import ApiResponse
from company_api.services import auth as auth_service
from company_api.services.identity import IdentityProvider

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# AUTHENTICATION ENDPOINTS
# =============================================================================

@router.post(
    "/register",
    response_model=ApiResponse[RegisterResponse],
    status_code=status.HTTP_201_CREATED
)
async def register(
    register_data: RegisterRequest,
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity_provider)
):
    """
    Register a new user.

    Process:
    1. Create the account with the identity provider
    2. Store the user with a bcrypt password hash

    Raises:
        400: Validation failed, email already registered or identity provider rejected the account
        503: Identity provider unavailable
    """
    logger.info(f"Registration attempt for: {register_data.email}")
    user_id = await auth_service.register(db, identity, register_data)

    return ApiResponse(
        message="User registered successfully. Please verify mobile OTP.",
        data=RegisterResponse(user_id=user_id)
    )


@router.post("/login", response_model=ApiResponse[LoginResponse])
def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate with email and password.

    Returns:
        Bearer token and the public user view

    Raises:
        401: Invalid credentials
    """
    logger.info(f"Login attempt for: {login_data.email}")
    token, user = auth_service.login(db, login_data)

    return ApiResponse(
        message="Login successful",
        data=LoginResponse(token=token, user=user)
    )


# =============================================================================
# VERIFICATION
# =============================================================================

@router.get("/verify-email", response_model=ApiResponse[None])
def verify_email(
    user_id: Optional[int] = Query(None),
    db: Session = Depends(get_db)
):
    """Mark the user's email as verified (link target from the verification email)."""
    if user_id is None:
        raise BadRequestError("user_id is required")

    auth_service.verify_email(db, user_id)
    return ApiResponse(message="Email verified successfully")


@router.post("/verify-mobile", response_model=ApiResponse[None])
def verify_mobile(
    verify_data: VerifyMobileRequest,
    db: Session = Depends(get_db)
):
    auth_service.verify_mobile(db, verify_data.user_id, verify_data.otp)
    return ApiResponse(message="Mobile verified successfully")
