"""
Business logic for events.

Plain CRUD over the gateway.  The ``registered`` counter is never set
here; only ``RegistrationService`` moves it.
"""

import logging
from typing import List, Optional

from nonprofit_api.app.core.errors import BusinessRuleError, NotFoundError
from nonprofit_api.app.core.storage import CapacityBelowRegistered, Storage
from nonprofit_api.app.schemas.event import EventCreate, EventRead, EventStatus, EventUpdate

logger = logging.getLogger(__name__)


class EventService:
    """Service for managing events."""

    @classmethod
    async def list_events(cls, status: Optional[EventStatus] = None) -> List[EventRead]:
        """Return events, most distant date first, optionally by status."""
        return [EventRead(**row) for row in Storage.list_events(status)]

    @classmethod
    async def get_event(cls, event_id: int) -> EventRead:
        row = Storage.get_event(event_id)
        if row is None:
            raise NotFoundError("Event not found")
        return EventRead(**row)

    @classmethod
    async def create_event(cls, data: EventCreate, current_user: dict) -> EventRead:
        row = Storage.create_event(data.model_dump())
        logger.info("User %s created event %s '%s'", current_user.get("id"), row["id"], data.title)
        return EventRead(**row)

    @classmethod
    async def update_event(cls, event_id: int, updates: EventUpdate, current_user: dict) -> EventRead:
        """Apply the fields present in ``updates``.

        Capacity may be lowered, but never below the number of seats
        already taken.
        """
        changes = updates.model_dump(exclude_unset=True)
        try:
            row = Storage.update_event(event_id, changes)
        except CapacityBelowRegistered as exc:
            raise BusinessRuleError("Capacity cannot be lower than the number of registrations") from exc
        if row is None:
            raise NotFoundError("Event not found")
        logger.info("User %s updated event %s: %s", current_user.get("id"), event_id, sorted(changes))
        return EventRead(**row)

    @classmethod
    async def delete_event(cls, event_id: int, current_user: dict) -> None:
        if not Storage.delete_event(event_id):
            raise NotFoundError("Event not found")
        logger.info("User %s deleted event %s", current_user.get("id"), event_id)
