from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends

from .. import models, schemas
from ..access import require_admin, require_user
from ..services.catalog_service import CatalogRepository, get_catalog
from ..services.lecture_views import course_view
from ..utils.lecture_status import utcnow

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("/", response_model=List[schemas.CourseView])
def list_courses(
    catalog: CatalogRepository = Depends(get_catalog),
    now: datetime = Depends(utcnow),
    user: models.User = Depends(require_user),
):
    return [course_view(c, now) for c in catalog.list_courses()]


@router.get("/{course_id}", response_model=schemas.CourseView)
def get_course(
    course_id: str,
    catalog: CatalogRepository = Depends(get_catalog),
    now: datetime = Depends(utcnow),
    user: models.User = Depends(require_user),
):
    return course_view(catalog.get_course(course_id), now)


@router.post("/", response_model=schemas.CourseOut, status_code=201)
def create_course(
    payload: schemas.CourseCreate,
    catalog: CatalogRepository = Depends(get_catalog),
    admin: models.User = Depends(require_admin),
):
    return catalog.add_course(payload)


@router.put("/{course_id}", response_model=schemas.CourseOut)
def update_course(
    course_id: str,
    payload: schemas.CourseUpdate,
    catalog: CatalogRepository = Depends(get_catalog),
    admin: models.User = Depends(require_admin),
):
    return catalog.update_course(course_id, payload)


@router.delete("/{course_id}", status_code=204)
def delete_course(
    course_id: str,
    catalog: CatalogRepository = Depends(get_catalog),
    admin: models.User = Depends(require_admin),
):
    """
    Delete a course together with its weeks and lectures.
    """
    catalog.delete_course(course_id)
