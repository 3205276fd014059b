"""
Authentication endpoints: signup, login and the current user.
"""

from fastapi import APIRouter, Depends

from nonprofit_api.app.core.security import get_current_user
from nonprofit_api.app.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserRead
from nonprofit_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/signup", response_model=AuthResponse)
async def signup(payload: SignupRequest) -> AuthResponse:
    """Create a donor account and return it with a bearer token."""
    return await UserService.signup(payload)


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest) -> AuthResponse:
    """Exchange email and password for a bearer token."""
    return await UserService.login(payload.email, payload.password)


@router.get("/me", response_model=UserRead)
async def me(current_user: dict = Depends(get_current_user)) -> UserRead:
    return await UserService.get_user(current_user["id"])
