from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends

from .. import models, schemas
from ..access import require_admin, require_user
from ..services.catalog_service import CatalogRepository, get_catalog
from ..services.lecture_views import lecture_detail, lecture_views
from ..services.youtube_service import fetch_video_info
from ..utils.lecture_status import utcnow

router = APIRouter(prefix="/lectures", tags=["lectures"])


@router.get("/", response_model=List[schemas.LectureView])
def list_lectures(
    course_id: Optional[str] = None,
    week_id: Optional[str] = None,
    catalog: CatalogRepository = Depends(get_catalog),
    now: datetime = Depends(utcnow),
    user: models.User = Depends(require_user),
):
    return lecture_views(catalog.list_lectures(course_id=course_id, week_id=week_id), now)


@router.get("/{lecture_id}", response_model=schemas.LectureDetail)
def get_lecture(
    lecture_id: str,
    catalog: CatalogRepository = Depends(get_catalog),
    now: datetime = Depends(utcnow),
    user: models.User = Depends(require_user),
):
    """
    Lecture page: status, countdown and the embeds for video and live chat.
    """
    lecture = catalog.get_lecture(lecture_id)
    course_name, week_name = catalog.names_for(lecture)
    return lecture_detail(lecture, course_name, week_name, now)


@router.get("/{lecture_id}/video", response_model=schemas.VideoInfo)
async def get_lecture_video(
    lecture_id: str,
    catalog: CatalogRepository = Depends(get_catalog),
    user: models.User = Depends(require_user),
):
    lecture = catalog.get_lecture(lecture_id)
    return await fetch_video_info(lecture.youtube_id)


@router.post("/", response_model=schemas.LectureOut, status_code=201)
def create_lecture(
    payload: schemas.LectureCreate,
    catalog: CatalogRepository = Depends(get_catalog),
    admin: models.User = Depends(require_admin),
):
    return catalog.add_lecture(payload)


@router.put("/{lecture_id}", response_model=schemas.LectureOut)
def update_lecture(
    lecture_id: str,
    payload: schemas.LectureUpdate,
    catalog: CatalogRepository = Depends(get_catalog),
    admin: models.User = Depends(require_admin),
):
    return catalog.update_lecture(lecture_id, payload)


@router.delete("/{lecture_id}", status_code=204)
def delete_lecture(
    lecture_id: str,
    catalog: CatalogRepository = Depends(get_catalog),
    admin: models.User = Depends(require_admin),
):
    catalog.delete_lecture(lecture_id)
