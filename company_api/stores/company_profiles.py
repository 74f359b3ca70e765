# company_api/stores/company_profiles.py
from typing import Optional

from sqlalchemy.orm import Session

from company_api.models.company import CompanyProfile


def get_profile_by_owner(db: Session, owner_id: int) -> Optional[CompanyProfile]:
    return db.query(CompanyProfile).filter(CompanyProfile.owner_id == owner_id).first()


def create_profile(db: Session, owner_id: int, values: dict) -> CompanyProfile:
    """Insert a profile row; raises IntegrityError if the owner already has one"""
    profile = CompanyProfile(owner_id=owner_id, **values)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def update_profile_by_owner(db: Session, owner_id: int, updates: dict) -> Optional[CompanyProfile]:
    """
    Apply ``updates`` to the owner's profile.

    ``social_links`` is merged key by key into the stored object; every other
    column is replaced. Returns None when the owner has no profile.
    """
    profile = get_profile_by_owner(db, owner_id)
    if profile is None:
        return None
    if not updates:
        return profile

    for field, value in updates.items():
        if field == "social_links":
            merged = dict(profile.social_links or {})
            merged.update(value)
            # Assign a new object so the JSON column is flagged dirty
            value = merged
        setattr(profile, field, value)

    db.commit()
    db.refresh(profile)
    return profile
