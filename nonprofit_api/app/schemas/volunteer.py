"""
Pydantic models for volunteer applications.
"""

import enum
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class VolunteerApplicationCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Sarah Johnson"])
    email: EmailStr = Field(..., examples=["sarah@example.com"])
    phone: Optional[str] = Field(None, examples=["(555) 123-4567"])
    availability: str = Field(..., min_length=1, examples=["weekends"])
    interests: List[str] = Field(default_factory=list, examples=[["Education & Tutoring"]])
    message: Optional[str] = None


class VolunteerApplicationRead(BaseModel):
    id: int
    user_id: int
    name: str
    email: str
    phone: Optional[str] = None
    availability: str
    interests: List[str]
    message: Optional[str] = None
    status: ApplicationStatus
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
