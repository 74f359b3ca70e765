# company_api/models/__init__.py
from company_api.models.user import User
from company_api.models.company import CompanyProfile

__all__ = [
    "User",
    "CompanyProfile",
]
