# company_api/schemas/__init__.py
from company_api.schemas.common import ApiResponse, ErrorResponse
from company_api.schemas.auth import (
    RegisterRequest, LoginRequest, VerifyMobileRequest,
    RegisterResponse, UserView, LoginResponse, AuthenticatedUser
)
from company_api.schemas.company import (
    SocialLinks, CompanyCreate, CompanyUpdate, CompanyResponse,
    AssetUploadResponse
)

__all__ = [
    # Common
    "ApiResponse", "ErrorResponse",
    # Auth
    "RegisterRequest", "LoginRequest", "VerifyMobileRequest",
    "RegisterResponse", "UserView", "LoginResponse", "AuthenticatedUser",
    # Company
    "SocialLinks", "CompanyCreate", "CompanyUpdate", "CompanyResponse",
    "AssetUploadResponse",
]
