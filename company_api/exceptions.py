# company_api/exceptions.py
"""Application errors, translated 1:1 to HTTP responses by main.py"""
from typing import Any, Optional


class AppError(Exception):
    """Base exception for the API"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class BadRequestError(AppError):
    """Validation failure, malformed payload or missing file"""
    status_code = 400


class UnauthorizedError(AppError):
    """Missing, invalid or expired token, or bad login credentials"""
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Duplicate resource (email, company profile).

    Reported as 400 to match the existing clients of this API.
    """
    status_code = 400


class ServiceUnavailableError(AppError):
    """Store or external collaborator failure"""
    status_code = 503
