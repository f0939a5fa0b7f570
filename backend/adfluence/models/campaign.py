"""Campaign models."""

from sqlalchemy import Column, String, Text, Float, DateTime, ForeignKey, Table
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from adfluence.database import Base
from adfluence.models.enums import CampaignStatus


campaign_niches = Table(
    "campaign_niches",
    Base.metadata,
    Column("campaign_id", UUID(as_uuid=True), ForeignKey("campaigns.id", ondelete="CASCADE"), primary_key=True),
    Column("niche_id", UUID(as_uuid=True), ForeignKey("niches.id", ondelete="CASCADE"), primary_key=True),
)

# The composite primary key makes "apply at most once" a store guarantee.
campaign_applicants = Table(
    "campaign_applicants",
    Base.metadata,
    Column("campaign_id", UUID(as_uuid=True), ForeignKey("campaigns.id", ondelete="CASCADE"), primary_key=True),
    Column("account_id", UUID(as_uuid=True), ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
    Column("applied_at", DateTime, default=datetime.utcnow, nullable=False),
)

campaign_accepted_influencers = Table(
    "campaign_accepted_influencers",
    Base.metadata,
    Column("campaign_id", UUID(as_uuid=True), ForeignKey("campaigns.id", ondelete="CASCADE"), primary_key=True),
    Column("account_id", UUID(as_uuid=True), ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
)


class CampaignPlatform(Base):
    """A platform a campaign targets."""

    __tablename__ = "campaign_platforms"

    campaign_id = Column(UUID(as_uuid=True), ForeignKey("campaigns.id", ondelete="CASCADE"), primary_key=True)
    platform = Column(String(20), primary_key=True)

    campaign = relationship("Campaign", back_populates="platform_entries")


class Campaign(Base):
    """Sponsorship opportunity posted by a brand or agency."""

    __tablename__ = "campaigns"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String(500), nullable=True)

    created_by_id = Column(UUID(as_uuid=True), ForeignKey("accounts.id"), nullable=False, index=True)

    budget = Column(Float, nullable=False, index=True)
    budget_min = Column(Float, nullable=True)
    budget_max = Column(Float, nullable=True)

    status = Column(String(20), default=CampaignStatus.ACTIVE.value, nullable=False, index=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    requirements = Column(Text, nullable=True)
    deliverables = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    created_by = relationship("Account", foreign_keys=[created_by_id])
    niches = relationship("Niche", secondary=campaign_niches, order_by="Niche.name")
    platform_entries = relationship(
        "CampaignPlatform",
        back_populates="campaign",
        cascade="all, delete-orphan",
        order_by="CampaignPlatform.platform"
    )
    applicants = relationship(
        "Account",
        secondary=campaign_applicants,
        order_by=campaign_applicants.c.applied_at
    )
    accepted_influencers = relationship("Account", secondary=campaign_accepted_influencers)

    @property
    def platforms(self):
        return [entry.platform for entry in self.platform_entries]

    @platforms.setter
    def platforms(self, values):
        self.platform_entries = [CampaignPlatform(platform=value) for value in dict.fromkeys(values)]

    @property
    def budget_range(self):
        if self.budget_min is None and self.budget_max is None:
            return None
        return {"min": self.budget_min, "max": self.budget_max}

    def __repr__(self):
        return f"<Campaign(id={self.id}, title={self.title}, status={self.status})>"
