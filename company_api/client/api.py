# company_api/client/api.py
"""
HTTP client for the Company Profile API.

Keeps the login session (token and user) and a cached copy of the caller's
company profile, so a save can be turned into a create, a minimal update, or
no request at all.
"""

import logging
from typing import Any, Dict, Optional, Tuple, Union

import httpx

from company_api.client.forms import changed_fields, form_to_payload

logger = logging.getLogger(__name__)

# (filename, bytes, mime type)
ImageFile = Tuple[str, bytes, str]


class ApiClientError(Exception):
    """Non-2xx response, carrying the server's message and details"""

    def __init__(self, status_code: int, message: str, details: Optional[Any] = None):
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(f"{status_code}: {message}")


class CompanyPortalClient:
    """
    Client for the auth and company endpoints.

    Args:
        base_url: API root, e.g. ``http://localhost:3000``
        http_client: Pre-built ``httpx.Client`` (its base URL is used as-is)
        timeout: Request timeout in seconds for a client built here
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        http_client: Optional[httpx.Client] = None,
        timeout: float = 30.0
    ):
        self.http = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None
        self.company: Optional[Dict[str, Any]] = None

    # =========================================================================
    # TRANSPORT
    # =========================================================================

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        logger.debug(f"🚀 API Request: {method} {path}")
        response = self.http.request(method, path, headers=self._headers(), **kwargs)

        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text or response.reason_phrase}

        if response.status_code == 401:
            # Token rejected: drop the session
            self.logout()

        if response.is_error:
            message = body.get("message", response.reason_phrase) if isinstance(body, dict) else response.reason_phrase
            details = body.get("details") if isinstance(body, dict) else None
            logger.error(f"❌ API Error: {method} {path} - {response.status_code} {message}")
            raise ApiClientError(response.status_code, message, details)

        logger.debug(f"✅ API Response: {method} {path} - {response.status_code}")
        return body

    # =========================================================================
    # AUTH
    # =========================================================================

    def register(
        self,
        email: str,
        password: str,
        full_name: str,
        gender: str,
        mobile_no: str
    ) -> int:
        body = self._request("POST", "/api/auth/register", json={
            "email": email,
            "password": password,
            "full_name": full_name,
            "gender": gender,
            "mobile_no": mobile_no,
            "signup_type": "e",
        })
        return body["data"]["user_id"]

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Log in and keep the token for later calls. Returns the user view."""
        body = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.token = body["data"]["token"]
        self.user = body["data"]["user"]
        return self.user

    def logout(self):
        self.token = None
        self.user = None
        self.company = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def verify_email(self, user_id: int) -> str:
        return self._request("GET", "/api/auth/verify-email", params={"user_id": user_id})["message"]

    def verify_mobile(self, user_id: int, otp: str) -> str:
        return self._request("POST", "/api/auth/verify-mobile", json={"user_id": user_id, "otp": otp})["message"]

    # =========================================================================
    # COMPANY PROFILE
    # =========================================================================

    def fetch_company(self) -> Optional[Dict[str, Any]]:
        """Fetch and cache the caller's profile (None if not created yet)."""
        self.company = self._request("GET", "/api/company/profile")["data"]
        return self.company

    def create_company(self, form: Dict[str, Any]) -> Dict[str, Any]:
        self.company = self._request("POST", "/api/company/register", json=form_to_payload(form))["data"]
        return self.company

    def update_company(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        self.company = self._request("PUT", "/api/company/profile", json=form_to_payload(changes))["data"]
        return self.company

    def save_company(self, form: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Save the setup form.

        Creates the profile when none is cached. Otherwise sends only the
        fields that differ from the cached profile, and sends nothing when no
        field changed.

        Returns:
            The stored profile
        """
        if self.company is None:
            return self.create_company(form)

        changes = changed_fields(form, self.company)
        if not changes:
            logger.info("No changes to save")
            return self.company
        return self.update_company(changes)

    # =========================================================================
    # LOGO & BANNER
    # =========================================================================

    def _send_image(self, method: str, path: str, field: str, image: Union[ImageFile, str]) -> str:
        if isinstance(image, str):
            body = self._request(method, path, json={"filePath": image})
        else:
            body = self._request(method, path, files={field: image})
        self.company = body["data"]["profile"]
        return body["data"]["url"]

    def upload_logo(self, image: Union[ImageFile, str]) -> str:
        """Upload a logo file or a ``filePath`` URL. Returns the hosted URL."""
        return self._send_image("POST", "/api/company/upload-logo", "logo", image)

    def upload_banner(self, image: Union[ImageFile, str]) -> str:
        return self._send_image("POST", "/api/company/upload-banner", "banner", image)

    def edit_logo(self, image: ImageFile) -> str:
        return self._send_image("PUT", "/api/company/edit-logo", "logo", image)

    def edit_banner(self, image: ImageFile) -> str:
        return self._send_image("PUT", "/api/company/edit-banner", "banner", image)

    # =========================================================================
    # HEALTH
    # =========================================================================

    def health(self) -> bool:
        return bool(self._request("GET", "/health").get("ok"))
