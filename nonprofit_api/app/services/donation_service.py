"""
Business logic for donations.

Payments are processed elsewhere; a donation row only records the
external payment identifier and the status the client reports.  Totals
count ``completed`` donations only.
"""

import logging
from decimal import Decimal
from typing import List

from nonprofit_api.app.core.storage import Storage
from nonprofit_api.app.schemas.donation import DonationCreate, DonationRead

CENTS = Decimal("0.01")


class DonationService:
    """Service for recording and summarising donations."""

    @classmethod
    async def create_donation(cls, data: DonationCreate, current_user: dict) -> DonationRead:
        """Record a donation made by the authenticated user.

        Donor name and email default to the account's own when the
        client leaves them out.
        """
        fields = data.model_dump()
        fields["amount"] = data.amount.quantize(CENTS)
        fields["donor_name"] = data.donor_name or current_user.get("name")
        fields["donor_email"] = data.donor_email or current_user.get("email")
        row = Storage.create_donation(current_user["id"], fields)
        logging.getLogger(__name__).info(
            "User %s recorded %s donation %s of %s",
            current_user["id"],
            data.status.value,
            row["id"],
            row["amount"],
        )
        return DonationRead(**row)

    @classmethod
    async def list_donations(cls) -> List[DonationRead]:
        return [DonationRead(**row) for row in Storage.list_donations()]

    @classmethod
    async def list_for_user(cls, user_id: int) -> List[DonationRead]:
        return [DonationRead(**row) for row in Storage.list_donations(user_id=user_id)]

    @classmethod
    async def total(cls) -> Decimal:
        return Storage.total_completed_donations().quantize(CENTS)
