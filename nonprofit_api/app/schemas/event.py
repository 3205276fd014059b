"""
Pydantic models for event data.

``EventBase`` holds the fields an administrator supplies; ``EventRead``
adds the identity and the ``registered`` counter, which clients can
read but never write.
"""

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class EventStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    PAST = "past"
    CANCELLED = "cancelled"


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Community Park Cleanup"])
    description: str = Field(..., examples=["Join us as we clean up our local park."])
    date: datetime = Field(..., examples=["2025-12-15T09:00:00"])
    location: str = Field(..., min_length=1, examples=["Central Park, Main Entrance"])
    image_url: Optional[str] = None
    capacity: int = Field(..., gt=0, examples=[60])
    status: EventStatus = EventStatus.UPCOMING


class EventCreate(EventBase):
    """Schema for creating an event."""
    pass


class EventUpdate(BaseModel):
    """Partial update; only provided fields are changed."""

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    date: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = None
    capacity: Optional[int] = Field(None, gt=0)
    status: Optional[EventStatus] = None

    @field_validator("title", "description", "date", "location", "capacity", "status")
    @classmethod
    def reject_null(cls, value):
        # Omit a field to leave it unchanged; null is not a value for it.
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class EventRead(EventBase):
    id: int
    registered: int
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }
