# company_api/services/auth.py
"""
Auth service: registration, login and account verification flags.
"""

import asyncio
import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from company_api.config import settings
from company_api.exceptions import ConflictError, NotFoundError, UnauthorizedError
from company_api.models.user import User
from company_api.sanitize import sanitize
from company_api.schemas.auth import LoginRequest, RegisterRequest, UserView
from company_api.security import create_access_token, hash_password, verify_password
from company_api.services.external import run_external
from company_api.services.identity import IdentityProvider
from company_api.stores import users as user_store

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def user_view(user: User) -> UserView:
    """Public view of a user: no password hash, name split for display"""
    full_name = user.full_name or ""
    parts = full_name.split()
    return UserView(
        id=user.id,
        email=user.email,
        first_name=parts[0] if parts else "",
        last_name=" ".join(parts[1:]),
        full_name=full_name,
        gender=user.gender,
        mobile_no=user.mobile_no,
        is_email_verified=bool(user.is_email_verified),
        is_mobile_verified=bool(user.is_mobile_verified),
    )


async def register(db: Session, identity: IdentityProvider, payload: RegisterRequest) -> int:
    """
    Register a new user and return its id.

    Process:
    1. Reject an email that is already registered
    2. Provision the account with the identity provider (failure aborts)
    3. Hash the password and store the user

    Raises:
        ConflictError: Email already registered
        BadRequestError / ServiceUnavailableError: Identity provider failure
    """
    email = sanitize(payload.email)
    full_name = sanitize(payload.full_name)
    mobile_no = sanitize(payload.mobile_no)

    # Store and bcrypt calls block; keep them off the event loop
    if await asyncio.to_thread(user_store.get_user_by_email, db, email):
        raise ConflictError("Email already registered")

    logger.info(f"Provisioning identity for: {email}")
    await run_external(
        identity.create_user,
        email,
        payload.password,
        mobile_no if mobile_no.startswith("+") else None,
        timeout=settings.EXTERNAL_CALL_TIMEOUT,
        operation="Identity provisioning"
    )

    password_hash = await asyncio.to_thread(hash_password, payload.password)
    try:
        user = await asyncio.to_thread(
            user_store.create_user,
            db,
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            gender=payload.gender,
            mobile_no=mobile_no,
            signup_type=payload.signup_type,
        )
    except IntegrityError:
        await asyncio.to_thread(db.rollback)
        raise ConflictError("Email already registered")

    logger.info(f"✅ User registered: {user.id}")
    return user.id


def login(db: Session, payload: LoginRequest) -> Tuple[str, UserView]:
    """
    Authenticate by email and password.

    Unknown email and wrong password fail with the same message.
    """
    email = sanitize(payload.email)
    user = user_store.get_user_by_email(db, email)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.warning(f"Login failed for {email}")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    token = create_access_token(user.id, user.email)
    logger.info(f"✅ Login successful: {user.id}")
    return token, user_view(user)


def verify_email(db: Session, user_id: int):
    if not user_store.set_flag(db, user_id, "is_email_verified"):
        raise NotFoundError("User not found")
    logger.info(f"Email verified for user {user_id}")


def verify_mobile(db: Session, user_id: int, otp: str):
    """
    Mark the mobile number as verified.

    The OTP is accepted as-is: no code is issued or stored yet, so there is
    nothing to compare it against.
    """
    if not user_store.set_flag(db, user_id, "is_mobile_verified"):
        raise NotFoundError("User not found")
    logger.info(f"Mobile verified for user {user_id}")
