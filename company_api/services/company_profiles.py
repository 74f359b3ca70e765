# company_api/services/company_profiles.py
"""
Company profile service.

One profile per user. Lifecycle: no profile -> created -> updated (any number
of times). Logo and banner uploads work in either state and create a
placeholder profile when the user has none yet.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from company_api.config import settings
from company_api.exceptions import BadRequestError, ConflictError, NotFoundError
from company_api.models.company import CompanyProfile
from company_api.sanitize import sanitize
from company_api.schemas.auth import AuthenticatedUser
from company_api.schemas.company import CompanyCreate, CompanyResponse, CompanyUpdate
from company_api.services.assets import AssetSource, AssetUploader
from company_api.services.external import run_external
from company_api.stores import company_profiles as profile_store

logger = logging.getLogger(__name__)

PROFILE_NOT_FOUND = "Company profile not found. Please create a profile first."

REQUIRED_FIELDS = (
    "company_name", "address", "city", "state", "country", "postal_code", "industry",
)

ASSET_KINDS = {
    "logo": ("logo_url", "logos"),
    "banner": ("banner_url", "banners"),
}


def placeholder_values(email: str) -> Dict[str, Any]:
    """Sentinel values satisfying the required columns of an empty profile"""
    return {
        "company_name": "My Company",
        "address": "TBD",
        "city": "TBD",
        "state": "TBD",
        "country": "TBD",
        "postal_code": "00000",
        "industry": "Technology",
        "email": email,
    }


def _clean_social_links(links: Dict[str, Optional[str]]) -> Dict[str, str]:
    # Empty strings are kept: they clear a single platform
    return {
        platform: sanitize(link)
        for platform, link in links.items()
        if isinstance(link, str)
    }


def build_update_set(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a partial payload into the columns to write.

    - null values are skipped
    - strings are trimmed and sanitized; blank results are skipped
    - ``social_links`` is cleaned per platform and blank links are kept
    """
    updates = {}
    for key, value in data.items():
        if value is None:
            continue
        if key == "social_links":
            updates[key] = _clean_social_links(value)
        elif isinstance(value, str):
            cleaned = sanitize(value)
            if cleaned:
                updates[key] = cleaned
        else:
            updates[key] = value
    return updates


def create_profile(db: Session, owner: AuthenticatedUser, payload: CompanyCreate) -> CompanyProfile:
    """
    Create the caller's profile.

    Raises:
        ConflictError: The caller already has a profile
    """
    if profile_store.get_profile_by_owner(db, owner.id):
        raise ConflictError("Company already exists for this user")

    values = {}
    for key, value in payload.model_dump().items():
        if key == "social_links":
            value = _clean_social_links(value) if value else None
        elif isinstance(value, str):
            value = sanitize(value)
        values[key] = value if value != "" else None

    empty = [field for field in REQUIRED_FIELDS if not values.get(field)]
    if empty:
        raise BadRequestError("Validation failed", details=[
            {"field": field, "message": "Must not be empty after removing markup"} for field in empty
        ])

    if not values.get("email"):
        values["email"] = owner.email

    try:
        profile = profile_store.create_profile(db, owner.id, values)
    except IntegrityError:
        # Lost a race with a concurrent create for the same owner
        db.rollback()
        raise ConflictError("Company already exists for this user")

    logger.info(f"✅ Company profile created: {profile.id} (owner {owner.id})")
    return profile


def get_profile(db: Session, owner: AuthenticatedUser) -> Optional[CompanyResponse]:
    """
    Fetch the caller's profile, or None.

    A blank stored email is shown as the caller's email; the row itself is
    not changed.
    """
    profile = profile_store.get_profile_by_owner(db, owner.id)
    if profile is None:
        return None

    view = CompanyResponse.model_validate(profile)
    if not (view.email or "").strip():
        view = view.model_copy(update={"email": owner.email})
    return view


def update_profile(db: Session, owner: AuthenticatedUser, payload: CompanyUpdate) -> CompanyProfile:
    """
    Partially update the caller's profile.

    Raises:
        NotFoundError: The caller has no profile yet
    """
    updates = build_update_set(payload.model_dump(exclude_unset=True))
    logger.info(f"Updating company profile for owner {owner.id}: {sorted(updates)}")

    profile = profile_store.update_profile_by_owner(db, owner.id, updates)
    if profile is None:
        raise NotFoundError(PROFILE_NOT_FOUND)
    return profile


def _store_asset_url(db: Session, owner: AuthenticatedUser, kind: str, column: str, url: str) -> CompanyProfile:
    if profile_store.get_profile_by_owner(db, owner.id) is None:
        logger.info(f"No profile for owner {owner.id}, creating placeholder before attaching {kind}")
        try:
            profile_store.create_profile(db, owner.id, placeholder_values(owner.email))
        except IntegrityError:
            # Created concurrently; attach to that one
            db.rollback()

    profile = profile_store.update_profile_by_owner(db, owner.id, {column: url})
    if profile is None:
        raise NotFoundError(PROFILE_NOT_FOUND)
    return profile


async def attach_asset(
    db: Session,
    owner: AuthenticatedUser,
    kind: str,
    source: AssetSource,
    uploader: AssetUploader,
    create_missing: bool = True
) -> Tuple[str, CompanyProfile]:
    """
    Upload a logo or banner and store its URL on the caller's profile.

    Args:
        kind: "logo" or "banner"
        create_missing: Create a placeholder profile when the caller has none;
            when False a missing profile is a NotFoundError

    Returns:
        (hosted URL, updated profile)
    """
    column, subfolder = ASSET_KINDS[kind]

    if not create_missing and await asyncio.to_thread(profile_store.get_profile_by_owner, db, owner.id) is None:
        raise NotFoundError(PROFILE_NOT_FOUND)

    asset = await run_external(
        uploader.upload_image,
        source,
        f"{settings.ASSET_FOLDER}/{subfolder}",
        timeout=settings.EXTERNAL_CALL_TIMEOUT,
        operation=f"{kind.capitalize()} upload"
    )

    profile = await asyncio.to_thread(_store_asset_url, db, owner, kind, column, asset.url)

    logger.info(f"✅ {kind.capitalize()} attached to profile {profile.id}")
    return asset.url, profile
