# company_api/schemas/auth.py
from pydantic import BaseModel, Field, field_validator
from email_validator import validate_email, EmailNotValidError
from typing import Literal, Optional
import re

_SYMBOL = re.compile(r"[^A-Za-z0-9]")


def check_account_email(v: str) -> str:
    # Validated only; the address is stored exactly as typed, case included
    try:
        validate_email(v.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Email must be valid")
    return v

# Request schemas
class RegisterRequest(BaseModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128, description="Min 8 chars, must include uppercase, lowercase, number, symbol")
    full_name: str = Field(..., min_length=2, max_length=255)
    gender: Literal["m", "f", "o"]
    mobile_no: str = Field(..., min_length=8, max_length=20)
    signup_type: Literal["e"] = "e"

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, v: str) -> str:
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain a lowercase letter")
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain an uppercase letter")
        if not re.search(r"[0-9]", v):
            raise ValueError("Password must contain a number")
        if not _SYMBOL.search(v):
            raise ValueError("Password must contain a symbol")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return check_account_email(v)

class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return check_account_email(v)

class VerifyMobileRequest(BaseModel):
    user_id: int
    otp: str

# Response schemas
class RegisterResponse(BaseModel):
    user_id: int

class UserView(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    full_name: str
    gender: Optional[str]
    mobile_no: Optional[str]
    is_email_verified: bool
    is_mobile_verified: bool

class LoginResponse(BaseModel):
    token: str
    user: UserView

class AuthenticatedUser(BaseModel):
    """Claims carried by a bearer token"""
    id: int
    email: str
