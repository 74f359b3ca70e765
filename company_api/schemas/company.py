# company_api/schemas/company.py
from pydantic import BaseModel, Field, field_validator
from email_validator import validate_email, EmailNotValidError
from typing import Dict, Literal, Optional, Union
from datetime import date, datetime
import re

# Accepts localhost (with optional port) or any dotted host
WEBSITE_PATTERN = re.compile(r"^https?://(localhost(:\d+)?|.+\..+)")

class SocialLinks(BaseModel):
    linkedin: Optional[str] = Field(None, max_length=255)
    twitter: Optional[str] = Field(None, max_length=255)
    facebook: Optional[str] = Field(None, max_length=255)
    instagram: Optional[str] = Field(None, max_length=255)

    class Config:
        extra = "forbid"

class CompanyFields(BaseModel):
    """Optional profile fields, validated the same way on create and update.

    Blank strings pass validation here; the service decides whether a blank
    value means "not provided".
    """
    website: Optional[str] = Field(None, max_length=255)
    founded_date: Optional[Union[date, Literal[""]]] = None
    description: Optional[str] = Field(None, max_length=2000)
    social_links: Optional[SocialLinks] = None
    company_size: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    mission: Optional[str] = Field(None, max_length=1000)
    vision: Optional[str] = Field(None, max_length=1000)
    founding_story: Optional[str] = Field(None, max_length=2000)

    @field_validator("website")
    @classmethod
    def check_website(cls, v: Optional[str]) -> Optional[str]:
        if v and v.strip() and not WEBSITE_PATTERN.match(v.strip()):
            raise ValueError("Website must be a valid URL")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: Optional[str]) -> Optional[str]:
        if v and v.strip():
            try:
                validate_email(v.strip(), check_deliverability=False)
            except EmailNotValidError:
                raise ValueError("Email must be valid")
        return v

# Request schemas
class CompanyCreate(CompanyFields):
    company_name: str = Field(..., min_length=2, max_length=255)
    address: str = Field(..., min_length=3)
    city: str = Field(..., min_length=2, max_length=100)
    state: str = Field(..., min_length=2, max_length=100)
    country: str = Field(..., min_length=2, max_length=100)
    postal_code: str = Field(..., min_length=3, max_length=20)
    industry: str = Field(..., min_length=2, max_length=100)

class CompanyUpdate(CompanyFields):
    company_name: Optional[str] = Field(None, min_length=2, max_length=255)
    address: Optional[str] = Field(None, min_length=3)
    city: Optional[str] = Field(None, min_length=2, max_length=100)
    state: Optional[str] = Field(None, min_length=2, max_length=100)
    country: Optional[str] = Field(None, min_length=2, max_length=100)
    postal_code: Optional[str] = Field(None, min_length=3, max_length=20)
    industry: Optional[str] = Field(None, min_length=2, max_length=100)

# Response schemas
class CompanyResponse(BaseModel):
    id: int
    owner_id: int
    company_name: str
    address: Optional[str]
    city: Optional[str]
    state: Optional[str]
    country: Optional[str]
    postal_code: Optional[str]
    website: Optional[str]
    logo_url: Optional[str]
    banner_url: Optional[str]
    industry: Optional[str]
    founded_date: Optional[date]
    description: Optional[str]
    social_links: Optional[Dict[str, str]]
    company_size: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    mission: Optional[str]
    vision: Optional[str]
    founding_story: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True

class AssetUploadResponse(BaseModel):
    url: str
    profile: CompanyResponse
