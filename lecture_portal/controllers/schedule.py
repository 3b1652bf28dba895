from datetime import datetime

from fastapi import APIRouter, Depends

from .. import models, schemas
from ..access import Capability, has_capability, require_user
from ..services.catalog_service import CatalogRepository, get_catalog
from ..services.lecture_views import course_view, schedule_view
from ..utils.lecture_status import utcnow

router = APIRouter(tags=["schedule"])

DASHBOARD_UPCOMING_LIMIT = 5


@router.get("/schedule", response_model=schemas.ScheduleOut)
def get_schedule(
    catalog: CatalogRepository = Depends(get_catalog),
    now: datetime = Depends(utcnow),
    user: models.User = Depends(require_user),
):
    return schedule_view(catalog.list_lectures(), now)


@router.get("/dashboard", response_model=schemas.DashboardOut)
def get_dashboard(
    catalog: CatalogRepository = Depends(get_catalog),
    now: datetime = Depends(utcnow),
    user: models.User = Depends(require_user),
):
    schedule = schedule_view(catalog.list_lectures(), now)
    return schemas.DashboardOut(
        is_admin=has_capability(user, Capability.ADMIN),
        live=schedule.live,
        upcoming=schedule.upcoming[:DASHBOARD_UPCOMING_LIMIT],
        courses=[course_view(c, now) for c in catalog.list_courses()],
    )
