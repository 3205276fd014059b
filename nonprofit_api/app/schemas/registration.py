"""
Pydantic models for event registrations.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .event import EventRead


class EventRegistrationRead(BaseModel):
    id: int
    user_id: int
    event_id: int
    registered_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class UserEventRead(BaseModel):
    """A caller's registration together with the event it refers to."""

    registration: EventRegistrationRead
    event: Optional[EventRead] = None
