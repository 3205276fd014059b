"""
Administrator dashboard endpoints.
"""

from fastapi import APIRouter, Depends

from nonprofit_api.app.core.security import require_roles
from nonprofit_api.app.schemas.statistics import AdminStats
from nonprofit_api.app.schemas.user import UserRole
from nonprofit_api.app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("/stats", response_model=AdminStats)
async def stats(current_user: dict = Depends(require_roles(UserRole.ADMIN))) -> AdminStats:
    return await StatisticsService.overview()
