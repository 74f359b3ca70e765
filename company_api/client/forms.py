# company_api/client/forms.py
"""
Translation between the company setup form and the API's profile shape.

The form uses flat camel-case names (``zipCode``, ``linkedinUrl``); the API
uses column names with social URLs grouped under ``social_links``.
"""

from typing import Any, Dict, Optional

FIELD_MAPPING = {
    "name": "company_name",
    "description": "description",
    "website": "website",
    "industry": "industry",
    "size": "company_size",
    "address": "address",
    "city": "city",
    "state": "state",
    "country": "country",
    "zipCode": "postal_code",
    "foundedYear": "founded_date",
    "foundingStory": "founding_story",
    "mission": "mission",
    "vision": "vision",
    "email": "email",
    "phone": "phone",
    "linkedinUrl": "social_links.linkedin",
    "twitterUrl": "social_links.twitter",
    "facebookUrl": "social_links.facebook",
    "instagramUrl": "social_links.instagram",
}

IMAGE_FIELDS = ("logo", "banner")

COMPLETION_FIELDS = ("company_name", "description", "website", "industry", "address", "logo_url")


def _lookup(profile: Dict[str, Any], path: str) -> Any:
    value = profile
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _normalize(value: Any) -> str:
    return "" if value is None else str(value).strip()


def profile_to_form(profile: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Form values for a stored profile; missing values become ``""``."""
    profile = profile or {}
    form = {}
    for form_key, path in FIELD_MAPPING.items():
        value = _lookup(profile, path)
        if form_key == "foundedYear":
            # "2019-01-01" or a full ISO timestamp
            value = str(value)[:4] if value else ""
        form[form_key] = "" if value is None else value
    form["logo"] = profile.get("logo_url")
    form["banner"] = profile.get("banner_url")
    return form


def form_to_payload(form: Dict[str, Any]) -> Dict[str, Any]:
    """
    Request body for the given form values.

    Only keys present in ``form`` are sent. ``foundedYear`` becomes January
    1st of that year, and social URLs are grouped under ``social_links``.
    """
    payload: Dict[str, Any] = {}
    for form_key, value in form.items():
        path = FIELD_MAPPING.get(form_key)
        if path is None:
            continue
        if form_key == "foundedYear":
            year = _normalize(value)
            value = f"{year}-01-01" if year else None
        if path.startswith("social_links."):
            payload.setdefault("social_links", {})[path.split(".", 1)[1]] = value
        else:
            payload[path] = value
    return payload


def changed_fields(form: Dict[str, Any], profile: Dict[str, Any]) -> Dict[str, Any]:
    """
    Form entries whose value differs from the stored profile.

    Both sides are compared as trimmed strings, so ``None`` and ``""`` are
    equal. Image fields are uploaded separately and never compared.
    """
    current = profile_to_form(profile)
    changes = {}
    for key, value in form.items():
        if key in IMAGE_FIELDS or key not in FIELD_MAPPING:
            continue
        if _normalize(value) != _normalize(current.get(key)):
            changes[key] = value
    return changes


def completion_percentage(profile: Optional[Dict[str, Any]]) -> int:
    """Share of the dashboard's key fields that are filled in, 0 to 100."""
    if not profile:
        return 0
    filled = sum(1 for field in COMPLETION_FIELDS if _normalize(profile.get(field)))
    return round(filled * 100 / len(COMPLETION_FIELDS))
