"""
Pydantic models for donations.

Amounts are ``Decimal`` end to end: parsed from the request (strings
such as ``"100.00"`` are preferred), stored as text and serialised back
as strings, so no value ever passes through a float.
"""

import enum
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class DonationType(str, enum.Enum):
    ONE_TIME = "one-time"
    MONTHLY = "monthly"


class DonationStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class DonationCreate(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, examples=["100.00"])
    donation_type: DonationType = DonationType.ONE_TIME
    # Set by the client after the external payment provider confirms.
    status: DonationStatus = DonationStatus.PENDING
    payment_id: Optional[str] = Field(None, examples=["pay_demo_1"])
    donor_name: Optional[str] = None
    donor_email: Optional[EmailStr] = None


class DonationRead(BaseModel):
    id: int
    user_id: Optional[int] = None
    amount: Decimal
    donation_type: DonationType
    status: DonationStatus
    payment_id: Optional[str] = None
    donor_name: Optional[str] = None
    donor_email: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class DonationTotal(BaseModel):
    total: Decimal
