"""Campaign persistence and membership queries."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import insert, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from adfluence.errors import AlreadyApplied
from adfluence.models.account import Account
from adfluence.models.campaign import Campaign, CampaignPlatform, campaign_applicants
from adfluence.models.niche import Niche
from adfluence.repositories.base import SQLAlchemyRepository
from adfluence.repositories.niche_repository import parse_uuid


class CampaignRepository(SQLAlchemyRepository[Campaign]):
    model = Campaign
    immutable_fields = frozenset({"id", "created_by", "created_by_id"})

    def query(self):
        return self.db.query(Campaign).options(
            selectinload(Campaign.created_by),
            selectinload(Campaign.niches),
            selectinload(Campaign.platform_entries),
        )

    def search(
        self,
        niche: Optional[str] = None,
        platform: Optional[str] = None,
        min_budget: Optional[float] = None,
        max_budget: Optional[float] = None
    ) -> List[Campaign]:
        """
        Campaigns matching every given filter.

        Budget bounds are inclusive. The niche filter accepts an id or a name.
        """
        query = self.query()

        if niche:
            niche_id = parse_uuid(niche)
            match = Niche.name == niche
            if niche_id is not None:
                match = or_(match, Niche.id == niche_id)
            query = query.filter(Campaign.niches.any(match))

        if platform:
            query = query.filter(Campaign.platform_entries.any(CampaignPlatform.platform == platform))

        if min_budget is not None:
            query = query.filter(Campaign.budget >= min_budget)

        if max_budget is not None:
            query = query.filter(Campaign.budget <= max_budget)

        return query.order_by(Campaign.created_at.desc()).all()

    def find_by_applicant(self, account_id: UUID) -> List[Campaign]:
        return self.query().filter(
            Campaign.applicants.any(Account.id == account_id)
        ).order_by(Campaign.created_at.desc()).all()

    def find_by_accepted(self, account_id: UUID, status: str) -> List[Campaign]:
        return self.query().filter(
            Campaign.accepted_influencers.any(Account.id == account_id),
            Campaign.status == status
        ).order_by(Campaign.created_at.desc()).all()

    def find_by_creator(self, account_id: UUID) -> List[Campaign]:
        return self.query().options(
            selectinload(Campaign.applicants),
            selectinload(Campaign.accepted_influencers),
        ).filter(
            Campaign.created_by_id == account_id
        ).order_by(Campaign.created_at.desc()).all()

    def has_applicant(self, campaign: Campaign, account_id: UUID) -> bool:
        return any(member.id == account_id for member in campaign.applicants)

    def add_applicant(self, campaign: Campaign, account_id: UUID) -> None:
        """
        Append an account to a campaign's applicants.

        The association's primary key rejects a second row for the same
        pair, so concurrent duplicate applications cannot both succeed.

        Raises:
            AlreadyApplied: the account is already an applicant
        """
        try:
            self.db.execute(
                insert(campaign_applicants).values(
                    campaign_id=campaign.id,
                    account_id=account_id,
                    applied_at=datetime.utcnow()
                )
            )
            self.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise AlreadyApplied() from e
        self.db.expire(campaign, ["applicants"])
