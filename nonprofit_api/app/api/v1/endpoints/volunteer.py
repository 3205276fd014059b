"""
Volunteer application endpoints for API v1.

Any authenticated user may apply once.  Administrators list
applications and decide on them; approval promotes the applicant to the
``volunteer`` role.
"""

from typing import List

from fastapi import APIRouter, Depends

from nonprofit_api.app.core.security import get_current_user, require_roles
from nonprofit_api.app.schemas.user import UserRole
from nonprofit_api.app.schemas.volunteer import (
    ApplicationStatusUpdate,
    VolunteerApplicationCreate,
    VolunteerApplicationRead,
)
from nonprofit_api.app.services.volunteer_service import VolunteerService

router = APIRouter()


@router.post("/apply", response_model=VolunteerApplicationRead)
async def apply(
    application: VolunteerApplicationCreate,
    current_user: dict = Depends(get_current_user),
) -> VolunteerApplicationRead:
    return await VolunteerService.submit(current_user["id"], application)


@router.get("/applications", response_model=List[VolunteerApplicationRead])
async def list_applications(
    current_user: dict = Depends(require_roles(UserRole.ADMIN)),
) -> List[VolunteerApplicationRead]:
    return await VolunteerService.list_all()


@router.patch("/applications/{application_id}", response_model=VolunteerApplicationRead)
async def update_application(
    application_id: int,
    update: ApplicationStatusUpdate,
    current_user: dict = Depends(require_roles(UserRole.ADMIN)),
) -> VolunteerApplicationRead:
    return await VolunteerService.set_status(application_id, update.status)
