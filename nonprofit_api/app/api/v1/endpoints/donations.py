"""
Donation endpoints for API v1.
"""

from typing import List

from fastapi import APIRouter, Depends

from nonprofit_api.app.core.security import get_current_user, require_roles
from nonprofit_api.app.schemas.donation import DonationCreate, DonationRead, DonationTotal
from nonprofit_api.app.schemas.user import UserRole
from nonprofit_api.app.services.donation_service import DonationService

router = APIRouter()


@router.get("", response_model=List[DonationRead])
async def list_donations(current_user: dict = Depends(require_roles(UserRole.ADMIN))) -> List[DonationRead]:
    return await DonationService.list_donations()


@router.get("/total", response_model=DonationTotal)
async def total_donations() -> DonationTotal:
    """Sum of all completed donations.  Public."""
    return DonationTotal(total=await DonationService.total())


@router.post("", response_model=DonationRead)
async def create_donation(
    donation: DonationCreate,
    current_user: dict = Depends(get_current_user),
) -> DonationRead:
    return await DonationService.create_donation(donation, current_user)
