"""
Event endpoints for API v1.

Reading events is public.  Creating, editing and deleting them requires
the ``admin`` role.  Registration requires any authenticated user.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from nonprofit_api.app.core.security import get_current_user, require_roles
from nonprofit_api.app.schemas.event import EventCreate, EventRead, EventStatus, EventUpdate
from nonprofit_api.app.schemas.registration import EventRegistrationRead
from nonprofit_api.app.schemas.user import UserRole
from nonprofit_api.app.services.event_service import EventService
from nonprofit_api.app.services.registration_service import RegistrationService

router = APIRouter()


@router.get("", response_model=List[EventRead])
async def list_events(status: Optional[EventStatus] = Query(None)) -> List[EventRead]:
    """List events, optionally filtered by ``status``."""
    return await EventService.list_events(status)


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: int) -> EventRead:
    return await EventService.get_event(event_id)


@router.post("", response_model=EventRead)
async def create_event(
    event: EventCreate,
    current_user: dict = Depends(require_roles(UserRole.ADMIN)),
) -> EventRead:
    return await EventService.create_event(event, current_user)


@router.put("/{event_id}", response_model=EventRead)
async def update_event(
    event_id: int,
    updates: EventUpdate,
    current_user: dict = Depends(require_roles(UserRole.ADMIN)),
) -> EventRead:
    """Update an event.  Unspecified fields remain unchanged."""
    return await EventService.update_event(event_id, updates, current_user)


@router.delete("/{event_id}")
async def delete_event(
    event_id: int,
    current_user: dict = Depends(require_roles(UserRole.ADMIN)),
) -> Dict[str, str]:
    """Delete an event together with its registrations."""
    await EventService.delete_event(event_id, current_user)
    return {"message": "Event deleted successfully"}


@router.post("/{event_id}/register", response_model=EventRegistrationRead)
async def register_for_event(
    event_id: int,
    current_user: dict = Depends(get_current_user),
) -> EventRegistrationRead:
    """Take one seat at an event for the caller.

    Returns 400 with ``Event is full`` or ``Already registered for this
    event``, and 404 if the event does not exist.
    """
    return await RegistrationService.register(event_id, current_user["id"])


@router.get("/{event_id}/registrations", response_model=List[EventRegistrationRead])
async def list_event_registrations(
    event_id: int,
    current_user: dict = Depends(require_roles(UserRole.ADMIN)),
) -> List[EventRegistrationRead]:
    return await RegistrationService.list_for_event(event_id)
