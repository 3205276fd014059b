"""
Pydantic models for user accounts and authentication.
"""

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserRole(str, enum.Enum):
    DONOR = "donor"
    VOLUNTEER = "volunteer"
    ADMIN = "admin"


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, examples=["Emily Rodriguez"])
    email: EmailStr = Field(..., examples=["emily@example.com"])
    password: str = Field(..., min_length=6, examples=["password123"])


class LoginRequest(BaseModel):
    """Login payload.

    Both fields are optional at the schema level so that a missing
    field produces the plain "Email and password are required" error
    rather than a validation list.
    """

    email: Optional[str] = None
    password: Optional[str] = None


class UserRead(BaseModel):
    """Public view of a user."""

    id: int
    name: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class AuthResponse(BaseModel):
    user: UserRead
    token: str


class RoleUpdate(BaseModel):
    role: UserRole
