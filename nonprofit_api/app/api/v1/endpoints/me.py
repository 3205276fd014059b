"""
The authenticated caller's own records.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from nonprofit_api.app.core.security import get_current_user
from nonprofit_api.app.schemas.donation import DonationRead
from nonprofit_api.app.schemas.registration import UserEventRead
from nonprofit_api.app.schemas.volunteer import VolunteerApplicationRead
from nonprofit_api.app.services.donation_service import DonationService
from nonprofit_api.app.services.registration_service import RegistrationService
from nonprofit_api.app.services.volunteer_service import VolunteerService

router = APIRouter()


@router.get("/events", response_model=List[UserEventRead])
async def my_events(current_user: dict = Depends(get_current_user)) -> List[UserEventRead]:
    return await RegistrationService.list_for_user(current_user["id"])


@router.get("/donations", response_model=List[DonationRead])
async def my_donations(current_user: dict = Depends(get_current_user)) -> List[DonationRead]:
    return await DonationService.list_for_user(current_user["id"])


@router.get("/volunteer", response_model=Optional[VolunteerApplicationRead])
async def my_application(current_user: dict = Depends(get_current_user)) -> Optional[VolunteerApplicationRead]:
    """The caller's volunteer application, or ``null`` if none."""
    return await VolunteerService.get_for_user(current_user["id"])
