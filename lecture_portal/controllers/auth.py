from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Cookie, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from .. import models, schemas
from ..access import require_user
from ..database import get_db
from ..security import create_access_token
from ..services import account_service
from ..services.email_service import send_lecture_invite
from ..utils import referral_codes

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=schemas.SignupOut, status_code=201)
def signup(
    payload: schemas.SignupRequest,
    response: Response,
    background_tasks: BackgroundTasks,
    pending_code: Optional[str] = Cookie(None, alias=referral_codes.STORAGE_KEY),
    db: Session = Depends(get_db),
):
    """
    Create an account. A pending referral code, from the body or from the
    cookie set by /signup?ref=..., is consumed here and the cookie cleared.
    """
    code = pending_code
    if referral_codes.validate(payload.referral_code):
        code = payload.referral_code
    user = account_service.create_user(db, payload, referral_code=code)
    if pending_code is not None:
        response.delete_cookie(referral_codes.STORAGE_KEY)

    redirect_to = "/dashboard"
    if user.referred_lecture_id:
        redirect_to = f"/lectures/{user.referred_lecture_id}"
        lecture = db.get(models.Lecture, user.referred_lecture_id)
        if lecture:
            background_tasks.add_task(
                send_lecture_invite, user.email, schemas.LectureOut.model_validate(lecture)
            )

    return schemas.SignupOut(
        access_token=create_access_token(user.id),
        user=account_service.user_out(user),
        redirect_to=redirect_to,
    )


@router.post("/login", response_model=schemas.Token)
def login(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = account_service.authenticate(db, form.username, form.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return schemas.Token(access_token=create_access_token(user.id))


@router.get("/me", response_model=schemas.UserOut)
def me(user: models.User = Depends(require_user)):
    return account_service.user_out(user)
