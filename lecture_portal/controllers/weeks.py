from typing import List, Optional

from fastapi import APIRouter, Depends

from .. import models, schemas
from ..access import require_admin, require_user
from ..services.catalog_service import CatalogRepository, get_catalog

router = APIRouter(prefix="/weeks", tags=["weeks"])


@router.get("/", response_model=List[schemas.WeekOut])
def list_weeks(
    course_id: Optional[str] = None,
    catalog: CatalogRepository = Depends(get_catalog),
    user: models.User = Depends(require_user),
):
    return catalog.list_weeks(course_id)


@router.get("/{week_id}", response_model=schemas.WeekOut)
def get_week(
    week_id: str,
    catalog: CatalogRepository = Depends(get_catalog),
    user: models.User = Depends(require_user),
):
    return catalog.get_week(week_id)


@router.post("/", response_model=schemas.WeekOut, status_code=201)
def create_week(
    payload: schemas.WeekCreate,
    catalog: CatalogRepository = Depends(get_catalog),
    admin: models.User = Depends(require_admin),
):
    return catalog.add_week(payload)


@router.put("/{week_id}", response_model=schemas.WeekOut)
def rename_week(
    week_id: str,
    payload: schemas.WeekUpdate,
    catalog: CatalogRepository = Depends(get_catalog),
    admin: models.User = Depends(require_admin),
):
    return catalog.update_week(week_id, payload)


@router.delete("/{week_id}", status_code=204)
def delete_week(
    week_id: str,
    catalog: CatalogRepository = Depends(get_catalog),
    admin: models.User = Depends(require_admin),
):
    catalog.delete_week(week_id)
