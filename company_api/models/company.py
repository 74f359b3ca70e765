# company_api/models/company.py
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, backref
from company_api.database import Base

class CompanyProfile(Base):
    __tablename__ = "company_profile"

    id = Column(Integer, primary_key=True, index=True)
    # One profile per user, enforced by the database
    owner_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True, index=True)
    company_name = Column(String(255), nullable=False)
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(100))
    country = Column(String(100))
    postal_code = Column(String(20))
    website = Column(String(255))
    logo_url = Column(Text)
    banner_url = Column(Text)
    industry = Column(String(100))
    founded_date = Column(Date)
    description = Column(Text)
    social_links = Column(JSON().with_variant(JSONB(), "postgresql"))
    company_size = Column(String(50))
    email = Column(String(255))
    phone = Column(String(20))
    mission = Column(Text)
    vision = Column(Text)
    founding_story = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    owner = relationship("User", backref=backref("company_profile", uselist=False))
