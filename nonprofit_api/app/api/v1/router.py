"""
Top-level router for version 1 of the API.

Aggregates the domain routers under their prefixes.  Add new domains
here.
"""

from typing import Dict

from fastapi import APIRouter

from .endpoints import admin, auth, contact, donations, events, me, users, volunteer

router = APIRouter()


@router.get("/health", tags=["health"])
async def health() -> Dict[str, str]:
    return {"status": "ok"}


router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(donations.router, prefix="/donations", tags=["donations"])
router.include_router(volunteer.router, prefix="/volunteer", tags=["volunteer"])
router.include_router(contact.router, prefix="/contact", tags=["contact"])
router.include_router(me.router, prefix="/user", tags=["user"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
