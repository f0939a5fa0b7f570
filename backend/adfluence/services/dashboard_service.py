"""Per-role dashboard aggregation."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from adfluence.models.account import Account
from adfluence.models.campaign import Campaign
from adfluence.models.enums import CampaignStatus
from adfluence.repositories.campaign_repository import CampaignRepository
from adfluence.services.authorization import BRAND_DASHBOARD, INFLUENCER_DASHBOARD, require_role


def campaign_earnings(campaign: Campaign) -> float:
    """
    One accepted influencer's share of a campaign budget.

    The budget is split equally across accepted influencers; a campaign
    with nobody accepted contributes nothing.
    """
    accepted = len(campaign.accepted_influencers)
    if accepted == 0:
        return 0.0
    return campaign.budget / accepted


def total_earnings(campaigns: Iterable[Campaign]) -> float:
    return sum(campaign_earnings(campaign) for campaign in campaigns)


def completion_rate(completed_count: int, active_count: int) -> float:
    """Percentage of accepted campaigns that are completed; 0 with none."""
    denominator = completed_count + active_count
    if denominator == 0:
        return 0.0
    return completed_count / denominator * 100


@dataclass
class InfluencerDashboard:
    applied: List[Campaign] = field(default_factory=list)
    active: List[Campaign] = field(default_factory=list)
    completed: List[Campaign] = field(default_factory=list)

    @property
    def stats(self) -> Dict[str, float]:
        return {
            "earnings": total_earnings(self.completed),
            "active_campaigns": len(self.active),
            "applications": len(self.applied),
            "completion_rate": completion_rate(len(self.completed), len(self.active)),
        }


class DashboardService:
    """Service for dashboard reads."""

    @staticmethod
    def influencer_dashboard(db: Session, account: Account) -> InfluencerDashboard:
        """
        Applied, active and completed campaigns of an influencer.

        Raises:
            Forbidden: account is not an influencer
        """
        require_role(account, INFLUENCER_DASHBOARD, "Only influencers can access this dashboard")

        campaigns = CampaignRepository(db)
        return InfluencerDashboard(
            applied=campaigns.find_by_applicant(account.id),
            active=campaigns.find_by_accepted(account.id, CampaignStatus.ACTIVE.value),
            completed=campaigns.find_by_accepted(account.id, CampaignStatus.COMPLETED.value),
        )

    @staticmethod
    def brand_dashboard(db: Session, account: Account) -> List[Campaign]:
        """
        Every campaign the account created, members loaded.

        Raises:
            Forbidden: account is not a brand or agency
        """
        require_role(account, BRAND_DASHBOARD, "Only brands and agencies can access this dashboard")
        return CampaignRepository(db).find_by_creator(account.id)
