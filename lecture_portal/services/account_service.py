import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..config import ADMIN_EMAILS
from ..security import hash_password, verify_password
from ..utils import referral_codes

logger = logging.getLogger(__name__)


def user_out(user: models.User) -> schemas.UserOut:
    referred_by = None
    if user.referred_by_rm_id and user.referred_lecture_id:
        referred_by = schemas.ReferredBy(rm_id=user.referred_by_rm_id, lecture_id=user.referred_lecture_id)
    return schemas.UserOut(
        id=user.id,
        email=user.email,
        name=user.name,
        mobile=user.mobile,
        is_admin=user.is_admin,
        created_at=user.created_at,
        referred_by=referred_by,
    )


def find_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email.lower()).first()


def create_user(db: Session, payload: schemas.SignupRequest, referral_code: Optional[str] = None) -> models.User:
    """
    Create an account, attributing it to a referral manager when
    ``referral_code`` decodes cleanly. A malformed code is ignored.
    """
    email = payload.email.lower()
    if find_by_email(db, email):
        raise HTTPException(status_code=409, detail="An account with this email already exists")

    user = models.User(
        email=email,
        name=payload.name,
        mobile=payload.mobile,
        password_hash=hash_password(payload.password),
        is_admin=email in ADMIN_EMAILS,
    )

    referral = referral_codes.decode(referral_code)
    if referral:
        user.referral_code = referral_code
        user.referred_by_rm_id = referral.manager_id
        user.referred_lecture_id = referral.lecture_id
    elif referral_code:
        logger.info("Ignoring malformed referral code %r at signup", referral_code)

    db.add(user)
    db.commit()
    db.refresh(user)
    if referral:
        logger.info("User %s signed up via referral %s", user.id, referral_code)
    else:
        logger.info("User %s signed up", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> Optional[models.User]:
    user = find_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def set_admin(db: Session, email: str) -> models.User:
    user = find_by_email(db, email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    user.is_admin = True
    db.commit()
    db.refresh(user)
    logger.info("Granted admin to user %s", user.id)
    return user
