"""
User administration endpoints for API v1.
"""

from typing import List

from fastapi import APIRouter, Depends

from nonprofit_api.app.core.security import require_roles
from nonprofit_api.app.schemas.user import RoleUpdate, UserRead, UserRole
from nonprofit_api.app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=List[UserRead])
async def list_users(current_user: dict = Depends(require_roles(UserRole.ADMIN))) -> List[UserRead]:
    return await UserService.list_users()


@router.put("/{user_id}/role", response_model=UserRead)
async def set_user_role(
    user_id: int,
    update: RoleUpdate,
    current_user: dict = Depends(require_roles(UserRole.ADMIN)),
) -> UserRead:
    """Assign a role to a user (admin only)."""
    return await UserService.set_role(user_id, update.role, current_user)
