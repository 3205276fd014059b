"""
Volunteer application review workflow.

A user may submit one application.  An administrator then sets its
status; approving it promotes the applicant to the ``volunteer`` role.
The status write and the role write are handed to the gateway together
(``Storage.update_application_status``) and commit or roll back as one.

Any status may be set from any other; reverting an approval does not
demote the user.
"""

import logging
from typing import List, Optional

from nonprofit_api.app.core.errors import BusinessRuleError, NotFoundError
from nonprofit_api.app.core.storage import DuplicateApplication, Storage
from nonprofit_api.app.schemas.user import UserRole
from nonprofit_api.app.schemas.volunteer import (
    ApplicationStatus,
    VolunteerApplicationCreate,
    VolunteerApplicationRead,
)

logger = logging.getLogger(__name__)

DUPLICATE_APPLICATION = "You have already submitted a volunteer application"


class VolunteerService:
    """Service for volunteer applications."""

    @classmethod
    async def submit(cls, user_id: int, data: VolunteerApplicationCreate) -> VolunteerApplicationRead:
        """Store a new pending application for ``user_id``.

        The existence check gives sequential duplicates a clear error;
        the ``UNIQUE(user_id)`` constraint rejects concurrent ones.
        """
        if Storage.get_user_volunteer_application(user_id) is not None:
            raise BusinessRuleError(DUPLICATE_APPLICATION)
        try:
            row = Storage.create_volunteer_application(user_id, data.model_dump())
        except DuplicateApplication as exc:
            raise BusinessRuleError(DUPLICATE_APPLICATION) from exc
        logger.info("User %s submitted volunteer application %s", user_id, row["id"])
        return VolunteerApplicationRead(**row)

    @classmethod
    async def set_status(cls, application_id: int, status: ApplicationStatus) -> VolunteerApplicationRead:
        role = UserRole.VOLUNTEER if status is ApplicationStatus.APPROVED else None
        row = Storage.update_application_status(application_id, status, applicant_role=role)
        if row is None:
            raise NotFoundError("Application not found")
        if role is not None:
            logger.info(
                "Application %s approved; user %s promoted to %s", application_id, row["user_id"], role.value
            )
        else:
            logger.info("Application %s set to %s", application_id, status.value)
        return VolunteerApplicationRead(**row)

    @classmethod
    async def get_for_user(cls, user_id: int) -> Optional[VolunteerApplicationRead]:
        row = Storage.get_user_volunteer_application(user_id)
        return VolunteerApplicationRead(**row) if row else None

    @classmethod
    async def list_all(cls) -> List[VolunteerApplicationRead]:
        return [VolunteerApplicationRead(**row) for row in Storage.list_volunteer_applications()]
