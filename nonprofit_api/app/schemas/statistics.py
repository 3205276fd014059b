"""
Pydantic model for the administrator overview.
"""

from decimal import Decimal

from pydantic import BaseModel


class AdminStats(BaseModel):
    total_events: int
    upcoming_events: int
    total_registrations: int
    total_donations: int
    total_donations_amount: Decimal
    total_volunteer_applications: int
    pending_applications: int
    new_contact_submissions: int
