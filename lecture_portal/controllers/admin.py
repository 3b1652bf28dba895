from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models, schemas
from ..access import require_admin
from ..database import get_db
from ..services import account_service
from ..services.seed_service import seed_sample_catalog
from ..utils.lecture_status import utcnow

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/set-admin", response_model=schemas.UserOut)
def set_admin(
    payload: schemas.SetAdminRequest,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    return account_service.user_out(account_service.set_admin(db, payload.email))


@router.post("/seed", status_code=201)
def seed_data(
    db: Session = Depends(get_db),
    now: datetime = Depends(utcnow),
    admin: models.User = Depends(require_admin),
):
    """
    Load the sample catalog with lectures scheduled around the current time.
    """
    return seed_sample_catalog(db, now)
