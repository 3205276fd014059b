"""
Service layer for the administrator overview.

All figures are read-only aggregates; the donation amount is summed
exactly through ``Storage.total_completed_donations``.
"""

from nonprofit_api.app.core.storage import Storage
from nonprofit_api.app.schemas.statistics import AdminStats
from nonprofit_api.app.services.donation_service import DonationService


class StatisticsService:
    """Aggregated counts across events, donations and applications."""

    @classmethod
    async def overview(cls) -> AdminStats:
        counts = Storage.counts()
        return AdminStats(total_donations_amount=await DonationService.total(), **counts)
