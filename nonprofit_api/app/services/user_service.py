"""
Business logic for user accounts.

Signup always creates a ``donor``; the only ways a role changes
afterwards are approval of a volunteer application
(``VolunteerService.set_status``) and ``set_role`` called by an
administrator.
"""

import logging
from typing import List, Optional

from pydantic.networks import validate_email

from nonprofit_api.app.core.errors import AuthenticationError, BusinessRuleError, NotFoundError, ValidationError
from nonprofit_api.app.core.security import credentials
from nonprofit_api.app.core.storage import DuplicateEmail, Storage
from nonprofit_api.app.schemas.user import AuthResponse, SignupRequest, UserRead, UserRole


class UserService:
    """Service for signup, login and user administration."""

    @classmethod
    async def signup(cls, data: SignupRequest) -> AuthResponse:
        """Create a donor account and return it with a fresh token.

        The email check before the insert gives the common case a clean
        error; the ``UNIQUE`` constraint on ``users.email`` covers two
        signups racing for the same address.
        """
        logger = logging.getLogger(__name__)
        if Storage.get_user_by_email(data.email) is not None:
            raise BusinessRuleError("User already exists")
        password_hash = credentials.hash_password(data.password)
        try:
            row = Storage.create_user(data.name, data.email, password_hash, UserRole.DONOR)
        except DuplicateEmail as exc:
            raise BusinessRuleError("User already exists") from exc
        logger.info("Registered user %s (id=%s)", data.email, row["id"])
        user = UserRead(**row)
        return AuthResponse(user=user, token=credentials.issue_token(user.id))

    @classmethod
    async def login(cls, email: Optional[str], password: Optional[str]) -> AuthResponse:
        """Check credentials and issue a token.

        The same message is used for an unknown email and a wrong
        password so the response does not reveal which accounts exist.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")
        row = Storage.get_user_by_email(cls._normalize_email(email))
        if row is None or not credentials.verify_password(password, row["password"]):
            logging.getLogger(__name__).info("Failed login for %s", email)
            raise AuthenticationError("Invalid credentials")
        user = UserRead(**row)
        return AuthResponse(user=user, token=credentials.issue_token(user.id))

    @staticmethod
    def _normalize_email(email: str) -> str:
        """Normalize an address the way ``EmailStr`` did at signup.

        Anything that is not a valid address is returned unchanged and
        simply fails the lookup.
        """
        try:
            return validate_email(email)[1]
        except ValueError:
            return email

    @classmethod
    async def get_user(cls, user_id: int) -> UserRead:
        row = Storage.get_user(user_id)
        if row is None:
            raise NotFoundError("User not found")
        return UserRead(**row)

    @classmethod
    async def list_users(cls) -> List[UserRead]:
        return [UserRead(**row) for row in Storage.list_users()]

    @classmethod
    async def set_role(cls, user_id: int, role: UserRole, acting_user: dict) -> UserRead:
        """Change a user's role (administrators only).

        An administrator may not demote themself, which would leave the
        system without the account that performed the change.
        """
        if acting_user.get("id") == user_id and role != UserRole.ADMIN:
            raise BusinessRuleError("Administrators cannot change their own role")
        row = Storage.set_user_role(user_id, role)
        if row is None:
            raise NotFoundError("User not found")
        logging.getLogger(__name__).info(
            "User %s set role of user %s to %s", acting_user.get("id"), user_id, role.value
        )
        return UserRead(**row)
