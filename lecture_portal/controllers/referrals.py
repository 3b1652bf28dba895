from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from .. import models, schemas
from ..access import require_admin
from ..database import get_db
from ..services import referral_service
from ..utils import referral_codes

router = APIRouter(prefix="/referrals", tags=["referrals"])
landing_router = APIRouter(tags=["referrals"])

# keep a pending code around long enough to finish signing up later
REFERRAL_COOKIE_MAX_AGE = 60 * 60 * 24 * 30


@landing_router.get("/signup", response_model=schemas.ReferralLanding)
def referral_landing(response: Response, ref: Optional[str] = None):
    """
    Target of shared referral links. A valid code is remembered in a cookie
    until the visitor signs up; anything else is treated as no referral.
    """
    decoded = referral_codes.decode(ref)
    if decoded is None:
        return schemas.ReferralLanding(referral_detected=False)
    response.set_cookie(
        referral_codes.STORAGE_KEY,
        ref,
        max_age=REFERRAL_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )
    return schemas.ReferralLanding(
        referral_detected=True,
        referral_code=ref,
        lecture_id=decoded.lecture_id,
    )


@router.post("/managers", response_model=schemas.ManagerOut, status_code=201)
def add_manager(
    payload: schemas.ManagerCreate,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    return referral_service.create_manager(db, payload)


@router.get("/managers", response_model=List[schemas.ManagerOut])
def list_managers(db: Session = Depends(get_db), admin: models.User = Depends(require_admin)):
    return referral_service.list_managers(db)


@router.get("/managers/{rm_id}/clients", response_model=List[schemas.UserOut])
def list_manager_clients(
    rm_id: str,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    return referral_service.list_clients(db, rm_id)


@router.post("/links", response_model=schemas.LinkOut, status_code=201)
def generate_link(
    payload: schemas.LinkCreate,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    return referral_service.create_link(db, payload)


@router.get("/links", response_model=List[schemas.ManagerLinks])
def list_links(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    return referral_service.list_links(db, search=search)
