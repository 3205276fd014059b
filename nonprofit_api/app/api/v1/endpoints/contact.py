"""
Contact-form endpoints for API v1.

Submitting the form is public; reading and triaging submissions is
reserved for administrators.
"""

from typing import List

from fastapi import APIRouter, Depends

from nonprofit_api.app.core.security import get_optional_user, require_roles
from nonprofit_api.app.schemas.contact import ContactCreate, ContactRead, ContactStatusUpdate
from nonprofit_api.app.schemas.user import UserRole
from nonprofit_api.app.services.contact_service import ContactService

router = APIRouter()


@router.post("", response_model=ContactRead)
async def submit_contact(
    submission: ContactCreate,
    current_user: dict | None = Depends(get_optional_user),
) -> ContactRead:
    return await ContactService.create_submission(submission)


@router.get("/submissions", response_model=List[ContactRead])
async def list_submissions(current_user: dict = Depends(require_roles(UserRole.ADMIN))) -> List[ContactRead]:
    return await ContactService.list_submissions()


@router.patch("/submissions/{submission_id}", response_model=ContactRead)
async def update_submission(
    submission_id: int,
    update: ContactStatusUpdate,
    current_user: dict = Depends(require_roles(UserRole.ADMIN)),
) -> ContactRead:
    return await ContactService.set_status(submission_id, update.status)
