# company_api/routers/company.py
"""
Company Profile Endpoints

Each authenticated user owns at most one company profile. All routes act on
the caller's own profile; there is no way to address another user's.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from company_api.dependencies import get_asset_uploader, get_current_user, get_db
from company_api.schemas.auth import AuthenticatedUser
from company_api.schemas.common import ApiResponse
from company_api.schemas.company import (
    AssetUploadResponse,
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate
)
from company_api.services import company_profiles as profile_service
from company_api.services.assets import AssetUploader
from company_api.uploads import parse_asset_source

logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# CREATE PROFILE
# =============================================================================

@router.post(
    "/register",
    response_model=ApiResponse[CompanyResponse],
    status_code=status.HTTP_201_CREATED
)
def register_company(
    company_data: CompanyCreate,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user)
):
    """
    Create the caller's company profile.

    If no email is given, the caller's account email is used.

    Raises:
        400: Validation failed or the caller already has a profile
    """
    logger.info(f"Creating company '{company_data.company_name}' for user {current_user.id}")
    profile = profile_service.create_profile(db, current_user, company_data)

    return ApiResponse(
        message="Company created",
        data=CompanyResponse.model_validate(profile)
    )


# =============================================================================
# GET / UPDATE PROFILE
# =============================================================================

@router.get("/profile", response_model=ApiResponse[Optional[CompanyResponse]])
def get_company_profile(
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user)
):
    """
    Get the caller's company profile.

    Returns ``data: null`` when no profile has been created yet.
    """
    profile = profile_service.get_profile(db, current_user)
    return ApiResponse(
        message="Company profile fetched" if profile else "No company profile yet",
        data=profile
    )


@router.put("/profile", response_model=ApiResponse[CompanyResponse])
def update_company_profile(
    company_data: CompanyUpdate,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user)
):
    """
    Partially update the caller's company profile.

    Omitted or null fields keep their stored value. Inside ``social_links``
    only the platforms sent are changed; an empty string clears one.

    Raises:
        404: The caller has no profile yet
    """
    profile = profile_service.update_profile(db, current_user, company_data)

    logger.info(f"✅ Company profile {profile.id} updated")
    return ApiResponse(
        message="Company updated",
        data=CompanyResponse.model_validate(profile)
    )


# =============================================================================
# LOGO & BANNER
# =============================================================================

async def _attach(
    request: Request,
    kind: str,
    db: Session,
    current_user: AuthenticatedUser,
    uploader: AssetUploader,
    allow_file_path: bool
) -> ApiResponse[AssetUploadResponse]:
    source = await parse_asset_source(request, kind, allow_file_path=allow_file_path)
    url, profile = await profile_service.attach_asset(
        db,
        current_user,
        kind,
        source,
        uploader,
        create_missing=allow_file_path
    )
    return ApiResponse(
        message=f"{kind.capitalize()} uploaded successfully",
        data=AssetUploadResponse(url=url, profile=CompanyResponse.model_validate(profile))
    )


@router.post("/upload-logo", response_model=ApiResponse[AssetUploadResponse])
async def upload_logo(
    request: Request,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
    uploader: AssetUploader = Depends(get_asset_uploader)
):
    """
    Upload a logo as multipart ``logo`` or JSON ``{"filePath": ...}``.

    Creates a placeholder profile when the caller has none.
    """
    return await _attach(request, "logo", db, current_user, uploader, allow_file_path=True)


@router.post("/upload-banner", response_model=ApiResponse[AssetUploadResponse])
async def upload_banner(
    request: Request,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
    uploader: AssetUploader = Depends(get_asset_uploader)
):
    """Same as upload-logo, for the ``banner`` field."""
    return await _attach(request, "banner", db, current_user, uploader, allow_file_path=True)


@router.put("/edit-logo", response_model=ApiResponse[AssetUploadResponse])
async def edit_logo(
    request: Request,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
    uploader: AssetUploader = Depends(get_asset_uploader)
):
    """
    Replace the logo of an existing profile (multipart ``logo`` only).

    Raises:
        404: The caller has no profile yet
    """
    return await _attach(request, "logo", db, current_user, uploader, allow_file_path=False)


@router.put("/edit-banner", response_model=ApiResponse[AssetUploadResponse])
async def edit_banner(
    request: Request,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
    uploader: AssetUploader = Depends(get_asset_uploader)
):
    return await _attach(request, "banner", db, current_user, uploader, allow_file_path=False)
