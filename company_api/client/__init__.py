from company_api.client.api import ApiClientError, CompanyPortalClient
from company_api.client.forms import (
    FIELD_MAPPING,
    changed_fields,
    completion_percentage,
    form_to_payload,
    profile_to_form,
)

__all__ = [
    "ApiClientError",
    "CompanyPortalClient",
    "FIELD_MAPPING",
    "changed_fields",
    "completion_percentage",
    "form_to_payload",
    "profile_to_form",
]
