# company_api/services/identity.py
import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from firebase_admin.exceptions import (
    DeadlineExceededError,
    FirebaseError,
    InternalError,
    UnavailableError
)

from company_api.config import Settings
from company_api.exceptions import BadRequestError, ServiceUnavailableError, UnauthorizedError

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "company-api"


@dataclass
class IdentityRecord:
    uid: str
    email: str


class IdentityProvider(ABC):
    """
    External identity provisioning.

    Selected once at startup (see ``build_identity_provider``) and handed to
    the auth service through a FastAPI dependency.
    """

    @abstractmethod
    def create_user(self, email: str, password: str, phone_number: Optional[str] = None) -> IdentityRecord:
        """Provision a user account with the provider"""

    @abstractmethod
    def verify_token(self, id_token: str) -> Dict:
        """Verify a provider-issued ID token and return its claims"""


class StubIdentityProvider(IdentityProvider):
    """Local stand-in used when no service account is configured"""

    def create_user(self, email: str, password: str, phone_number: Optional[str] = None) -> IdentityRecord:
        logger.info(f"🔧 MOCK: Provisioning identity for {email}")
        return IdentityRecord(uid=f"local_{int(time.time() * 1000)}", email=email)

    def verify_token(self, id_token: str) -> Dict:
        raise ServiceUnavailableError("Identity provider not configured")


class FirebaseIdentityProvider(IdentityProvider):
    """Firebase Authentication via the Admin SDK"""

    def __init__(self, service_account: str, project_id: str = ""):
        cred = credentials.Certificate(self._load_service_account(service_account))
        options = {"projectId": project_id} if project_id else None
        try:
            self.app = firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            self.app = firebase_admin.initialize_app(cred, options, name=FIREBASE_APP_NAME)

    @staticmethod
    def _load_service_account(service_account: str):
        """Service account given as inline JSON or as a path to a JSON file"""
        raw = service_account.strip()
        if raw.startswith("{"):
            try:
                return json.loads(raw)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid FIREBASE_SERVICE_ACCOUNT JSON: {e}")
        return raw

    def create_user(self, email: str, password: str, phone_number: Optional[str] = None) -> IdentityRecord:
        try:
            user = firebase_auth.create_user(
                email=email,
                password=password,
                phone_number=phone_number,
                email_verified=False,
                disabled=False,
                app=self.app
            )
        except (UnavailableError, DeadlineExceededError, InternalError) as e:
            logger.error(f"Firebase unavailable while creating {email}: {e}")
            raise ServiceUnavailableError(f"Identity provider unavailable: {e}")
        except (FirebaseError, ValueError) as e:
            logger.warning(f"Firebase user creation failed for {email}: {e}")
            raise BadRequestError(str(e))

        logger.info(f"✅ Firebase user created: {user.uid}")
        return IdentityRecord(uid=user.uid, email=email)

    def verify_token(self, id_token: str) -> Dict:
        try:
            return firebase_auth.verify_id_token(id_token, app=self.app)
        except (FirebaseError, ValueError) as e:
            logger.warning(f"Firebase token rejected: {e}")
            raise UnauthorizedError("Invalid Firebase ID token")


def build_identity_provider(settings: Settings) -> IdentityProvider:
    """Pick the identity provider for this process"""
    if settings.USE_MOCK_AUTH or not settings.FIREBASE_SERVICE_ACCOUNT.strip():
        logger.warning("🔧 Identity provider not configured - using local stub (development only!)")
        return StubIdentityProvider()

    logger.info("Using Firebase identity provider")
    return FirebaseIdentityProvider(
        settings.FIREBASE_SERVICE_ACCOUNT,
        settings.FIREBASE_PROJECT_ID
    )
