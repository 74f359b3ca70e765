# company_api/stores/users.py
from typing import Optional

from sqlalchemy.orm import Session

from company_api.models.user import User


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def create_user(
    db: Session,
    email: str,
    password_hash: str,
    full_name: str,
    gender: str,
    mobile_no: str,
    signup_type: str = 'e'
) -> User:
    user = User(
        email=email,
        password_hash=password_hash,
        full_name=full_name,
        gender=gender,
        mobile_no=mobile_no,
        signup_type=signup_type,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def set_flag(db: Session, user_id: int, flag: str, value: bool = True) -> bool:
    """Set a verification flag; returns False when no user matched"""
    updated = db.query(User).filter(User.id == user_id).update({flag: value})
    db.commit()
    return updated > 0
