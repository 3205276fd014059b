"""
Pydantic models for contact-form submissions.
"""

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class ContactStatus(str, enum.Enum):
    NEW = "new"
    READ = "read"
    RESPONDED = "responded"


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class ContactRead(BaseModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    status: ContactStatus
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class ContactStatusUpdate(BaseModel):
    status: ContactStatus
