"""Campaign creation, discovery and applications."""

from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from adfluence.errors import AlreadyApplied, NotFound, ValidationError
from adfluence.models.account import Account
from adfluence.models.campaign import Campaign
from adfluence.models.schemas import CampaignCreate
from adfluence.repositories.campaign_repository import CampaignRepository
from adfluence.repositories.niche_repository import NicheRepository, parse_uuid
from adfluence.services.authorization import CAMPAIGN_APPLICANTS, CAMPAIGN_CREATORS, require_role
from adfluence.services.logging_service import logger
from adfluence.utils.validators import sanitize_input


class CampaignService:
    """Service for campaign operations."""

    @staticmethod
    def create_campaign(
        db: Session,
        creator: Account,
        data: CampaignCreate,
        image: Optional[str] = None
    ) -> Campaign:
        """
        Post a new campaign owned by a brand or agency.

        Args:
            db: Database session
            creator: Authenticated account
            data: Validated campaign fields
            image: Storage reference of an uploaded image

        Returns:
            Persisted campaign with empty applicant and accepted sets

        Raises:
            Forbidden: creator is not a brand or agency
            ValidationError: a niche could not be resolved
        """
        require_role(creator, CAMPAIGN_CREATORS, "Only brands and agencies can create campaigns")

        niche_repo = NicheRepository(db)
        niches = []
        for identifier in dict.fromkeys(data.niches):
            niche = niche_repo.resolve(identifier)
            if not niche:
                raise ValidationError(f"Unknown niche '{identifier}'")
            if niche not in niches:
                niches.append(niche)

        budget_range = data.budget_range
        campaign = Campaign(
            title=sanitize_input(data.title, max_length=200),
            description=sanitize_input(data.description, max_length=10000),
            image=image,
            created_by_id=creator.id,
            niches=niches,
            platforms=[platform.value for platform in data.platforms],
            budget=data.budget,
            budget_min=budget_range.min if budget_range else None,
            budget_max=budget_range.max if budget_range else None,
            status=data.status.value,
            start_date=data.start_date,
            end_date=data.end_date,
            requirements=sanitize_input(data.requirements, max_length=10000) or None,
            deliverables=sanitize_input(data.deliverables, max_length=10000) or None
        )

        niche_repo.increment_campaign_counts(niches)
        campaign = CampaignRepository(db).save(campaign)

        logger.info(
            "Campaign created",
            campaign_id=str(campaign.id),
            creator_id=str(creator.id),
            status=campaign.status
        )
        return campaign

    @staticmethod
    def list_campaigns(
        db: Session,
        niche: Optional[str] = None,
        platform: Optional[str] = None,
        min_budget: Optional[float] = None,
        max_budget: Optional[float] = None
    ) -> List[Campaign]:
        """
        Public campaign search; every filter is optional.

        Budget bounds are inclusive.
        """
        return CampaignRepository(db).search(
            niche=niche,
            platform=platform,
            min_budget=min_budget,
            max_budget=max_budget
        )

    @staticmethod
    def get_campaign(db: Session, campaign_id) -> Campaign:
        """
        Raises:
            NotFound: unknown or malformed id
        """
        parsed = parse_uuid(campaign_id)
        campaign = CampaignRepository(db).find_by_id(parsed) if parsed else None
        if not campaign:
            raise NotFound("Campaign not found")
        return campaign

    @staticmethod
    def apply(db: Session, applicant: Account, campaign_id) -> Campaign:
        """
        Add an influencer to a campaign's applicants.

        Campaign status is not consulted.

        Raises:
            Forbidden: applicant is not an influencer
            NotFound: campaign does not exist
            AlreadyApplied: applicant is already in the applicant set
        """
        require_role(applicant, CAMPAIGN_APPLICANTS, "Only influencers can apply to campaigns")

        campaign = CampaignService.get_campaign(db, campaign_id)
        campaigns = CampaignRepository(db)

        if campaigns.has_applicant(campaign, applicant.id):
            raise AlreadyApplied()

        campaigns.add_applicant(campaign, applicant.id)

        logger.info("Campaign application submitted", campaign_id=str(campaign.id), applicant_id=str(applicant.id))
        return campaign
