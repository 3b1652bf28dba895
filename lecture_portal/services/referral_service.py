import logging
from collections import Counter
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..config import PUBLIC_BASE_URL
from ..utils import referral_codes
from .account_service import user_out

logger = logging.getLogger(__name__)


def _ensure_manager_exists(rm_id: str, db: Session) -> models.ReferralManager:
    manager = db.get(models.ReferralManager, rm_id)
    if not manager:
        raise HTTPException(status_code=404, detail="Referral manager not found")
    return manager


def _client_counts(db: Session) -> Counter:
    rows = (
        db.query(models.User.referred_by_rm_id)
        .filter(models.User.referred_by_rm_id.isnot(None))
        .all()
    )
    return Counter(rm_id for (rm_id,) in rows)


def _manager_out(manager: models.ReferralManager, client_count: int = 0) -> schemas.ManagerOut:
    return schemas.ManagerOut(
        id=manager.id,
        name=manager.name,
        email=manager.email,
        created_at=manager.created_at,
        link_count=len(manager.links),
        client_count=client_count,
    )


def _link_out(link: models.ReferralLink, base_url: str) -> schemas.LinkOut:
    return schemas.LinkOut(
        referral_code=link.referral_code,
        rm_id=link.rm_id,
        lecture_id=link.lecture_id,
        lecture_title=link.lecture.title,
        created_at=link.created_at,
        url=referral_codes.generate_link(link.rm_id, link.lecture_id, base_url),
    )


def create_manager(db: Session, payload: schemas.ManagerCreate) -> schemas.ManagerOut:
    email = payload.email.lower()
    if db.query(models.ReferralManager).filter(models.ReferralManager.email == email).first():
        raise HTTPException(status_code=409, detail="Referral manager with this email already exists")
    manager = models.ReferralManager(name=payload.name, email=email)
    db.add(manager)
    db.commit()
    db.refresh(manager)
    logger.info("Added referral manager %s (%s)", manager.id, manager.email)
    return _manager_out(manager)


def list_managers(db: Session) -> List[schemas.ManagerOut]:
    counts = _client_counts(db)
    managers = db.query(models.ReferralManager).order_by(models.ReferralManager.name).all()
    return [_manager_out(m, counts.get(m.id, 0)) for m in managers]


def list_clients(db: Session, rm_id: str) -> List[schemas.UserOut]:
    _ensure_manager_exists(rm_id, db)
    users = (
        db.query(models.User)
        .filter(models.User.referred_by_rm_id == rm_id)
        .order_by(models.User.created_at)
        .all()
    )
    return [user_out(u) for u in users]


def create_link(
    db: Session, payload: schemas.LinkCreate, base_url: str = PUBLIC_BASE_URL
) -> schemas.LinkOut:
    manager = _ensure_manager_exists(payload.rm_id, db)
    lecture = db.get(models.Lecture, payload.lecture_id)
    if not lecture:
        raise HTTPException(status_code=404, detail="Lecture not found")
    try:
        code = referral_codes.encode(payload.rm_id, payload.lecture_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    link = db.get(models.ReferralLink, code)
    if link is None:
        link = models.ReferralLink(referral_code=code)
        manager.links.append(link)
        lecture.referral_links.append(link)
        db.add(link)
        db.commit()
        db.refresh(link)
        logger.info("Generated referral link %s", code)
    return _link_out(link, base_url)


def list_links(
    db: Session, search: Optional[str] = None, base_url: str = PUBLIC_BASE_URL
) -> List[schemas.ManagerLinks]:
    """
    All referral links grouped by manager, optionally narrowed to lectures
    whose title contains ``search`` (case-insensitive).
    """
    counts = _client_counts(db)
    needle = search.lower() if search else None
    grouped = []
    managers = db.query(models.ReferralManager).order_by(models.ReferralManager.name).all()
    for manager in managers:
        links = sorted(manager.links, key=lambda link: link.created_at)
        if needle:
            links = [link for link in links if needle in link.lecture.title.lower()]
        if not links:
            continue
        grouped.append(
            schemas.ManagerLinks(
                manager=_manager_out(manager, counts.get(manager.id, 0)),
                links=[_link_out(link, base_url) for link in links],
            )
        )
    return grouped
