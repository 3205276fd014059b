"""
Business logic for contact-form submissions.
"""

import logging
from typing import List

from nonprofit_api.app.core.errors import NotFoundError
from nonprofit_api.app.core.storage import Storage
from nonprofit_api.app.schemas.contact import ContactCreate, ContactRead, ContactStatus


class ContactService:
    """Service for the public contact form and its admin inbox."""

    @classmethod
    async def create_submission(cls, data: ContactCreate) -> ContactRead:
        row = Storage.create_contact_submission(data.model_dump())
        logging.getLogger(__name__).info("Contact submission %s received from %s", row["id"], data.email)
        return ContactRead(**row)

    @classmethod
    async def list_submissions(cls) -> List[ContactRead]:
        return [ContactRead(**row) for row in Storage.list_contact_submissions()]

    @classmethod
    async def set_status(cls, submission_id: int, status: ContactStatus) -> ContactRead:
        row = Storage.update_contact_status(submission_id, status)
        if row is None:
            raise NotFoundError("Submission not found")
        return ContactRead(**row)
