"""
Event registration workflow.

Two invariants are protected here:

* an event never has more registrations than its capacity;
* a user holds at most one registration per event.

The checks and the writes happen in a single gateway call,
``Storage.register_for_event``, which takes the database write lock,
increments ``registered`` only while a seat is left and inserts the
registration under a ``UNIQUE(user_id, event_id)`` constraint.  Nothing
is read here first and then written back, so concurrent requests for the
last seats cannot overbook the event.  A rejection is final for the
request; no retry is attempted.
"""

import logging
from typing import List

from nonprofit_api.app.core.errors import BusinessRuleError, NotFoundError
from nonprofit_api.app.core.storage import AlreadyRegistered, EventFull, EventNotFound, Storage
from nonprofit_api.app.schemas.event import EventRead
from nonprofit_api.app.schemas.registration import EventRegistrationRead, UserEventRead

logger = logging.getLogger(__name__)

EVENT_FULL = "Event is full"
ALREADY_REGISTERED = "Already registered for this event"


class RegistrationService:
    """Service for registering users to events."""

    @classmethod
    async def register(cls, event_id: int, user_id: int) -> EventRegistrationRead:
        """Register ``user_id`` for ``event_id``.

        Raises
        ------
        NotFoundError
            The event does not exist.
        BusinessRuleError
            The user is already registered, or no seat is left.  An
            existing registration is reported first, so a registered
            user retrying on a now-full event learns they already hold a
            seat.
        """
        try:
            row = Storage.register_for_event(event_id, user_id)
        except EventNotFound as exc:
            raise NotFoundError("Event not found") from exc
        except AlreadyRegistered as exc:
            raise BusinessRuleError(ALREADY_REGISTERED) from exc
        except EventFull as exc:
            logger.info("Registration of user %s rejected: event %s is full", user_id, event_id)
            raise BusinessRuleError(EVENT_FULL) from exc
        logger.info("User %s registered for event %s", user_id, event_id)
        return EventRegistrationRead(**row)

    @classmethod
    async def list_for_user(cls, user_id: int) -> List[UserEventRead]:
        """Return the user's registrations, newest first, with their events."""
        results: List[UserEventRead] = []
        for row in Storage.list_user_registrations(user_id):
            event_row = Storage.get_event(row["event_id"])
            results.append(
                UserEventRead(
                    registration=EventRegistrationRead(**row),
                    event=EventRead(**event_row) if event_row else None,
                )
            )
        return results

    @classmethod
    async def list_for_event(cls, event_id: int) -> List[EventRegistrationRead]:
        if Storage.get_event(event_id) is None:
            raise NotFoundError("Event not found")
        return [EventRegistrationRead(**row) for row in Storage.list_event_registrations(event_id)]
