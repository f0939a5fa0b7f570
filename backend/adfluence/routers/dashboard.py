"""Dashboard endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from adfluence.database import get_db
from adfluence.models.account import Account
from adfluence.models.schemas import (
    BrandCampaignView,
    BrandDashboardResponse,
    CampaignView,
    InfluencerCampaigns,
    InfluencerDashboardResponse,
    InfluencerStats
)
from adfluence.middleware.auth import get_current_account
from adfluence.services.auth_service import AuthService
from adfluence.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/influencer", response_model=InfluencerDashboardResponse)
def influencer_dashboard(
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db)
):
    """
    Applied, active and completed campaigns with earnings and completion rate.
    """
    dashboard = DashboardService.influencer_dashboard(db, account)

    return InfluencerDashboardResponse(
        stats=InfluencerStats(**dashboard.stats),
        campaigns=InfluencerCampaigns(
            applied=[CampaignView.model_validate(c) for c in dashboard.applied],
            active=[CampaignView.model_validate(c) for c in dashboard.active],
            completed=[CampaignView.model_validate(c) for c in dashboard.completed],
        ),
        account=AuthService.serialize(account)
    )


@router.get("/brand", response_model=BrandDashboardResponse)
def brand_dashboard(
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db)
):
    """
    Campaigns created by the account with applicant profiles resolved.
    """
    campaigns = DashboardService.brand_dashboard(db, account)

    return BrandDashboardResponse(
        campaigns=[BrandCampaignView.model_validate(c) for c in campaigns],
        account=AuthService.serialize(account)
    )
