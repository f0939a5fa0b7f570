"""Account models: one table, one mapped class per role."""

from sqlalchemy import Column, String, Text, DateTime, Integer, Boolean, ForeignKey, Table
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from adfluence.database import Base
from adfluence.models.enums import AccountRole


influencer_niches = Table(
    "influencer_niches",
    Base.metadata,
    Column("account_id", UUID(as_uuid=True), ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
    Column("niche_id", UUID(as_uuid=True), ForeignKey("niches.id", ondelete="CASCADE"), primary_key=True),
)


class Account(Base):
    """Registered identity. The role column selects the mapped subclass."""

    __tablename__ = "accounts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, index=True)

    profile_image = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    company_name = Column(String(200), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    sessions = relationship(
        "AccountSession",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="AccountSession.created_at"
    )

    __mapper_args__ = {"polymorphic_on": role}

    @property
    def tokens(self):
        """Live session tokens, oldest first."""
        return [session.session_token for session in self.sessions]

    @property
    def followers(self) -> int:
        return 0

    def __repr__(self):
        return f"<{type(self).__name__}(id={self.id}, email={self.email})>"


class SponsorAccount(Account):
    """Accounts that post campaigns."""

    __mapper_args__ = {"polymorphic_abstract": True}


class BrandAccount(SponsorAccount):
    __mapper_args__ = {"polymorphic_identity": AccountRole.BRAND.value}


class AgencyAccount(SponsorAccount):
    __mapper_args__ = {"polymorphic_identity": AccountRole.AGENCY.value}


class IndividualAccount(Account):
    __mapper_args__ = {"polymorphic_identity": AccountRole.INDIVIDUAL.value}


class InfluencerAccount(Account):
    """Creator account; the only variant with niches and social profiles."""

    __mapper_args__ = {"polymorphic_identity": AccountRole.INFLUENCER.value}

    niches = relationship("Niche", secondary=influencer_niches, order_by="Niche.name")
    social_media = relationship(
        "SocialMediaProfile",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="SocialMediaProfile.platform"
    )

    @property
    def followers(self) -> int:
        """Followers summed across every listed social profile."""
        return sum(profile.followers or 0 for profile in self.social_media)


class SocialMediaProfile(Base):
    """A handle an influencer holds on one platform."""

    __tablename__ = "social_media_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(UUID(as_uuid=True), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)

    platform = Column(String(20), nullable=False)
    username = Column(String(100), nullable=False)
    followers = Column(Integer, default=0, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)

    # Relationships
    account = relationship("InfluencerAccount", back_populates="social_media")

    def __repr__(self):
        return f"<SocialMediaProfile(platform={self.platform}, username={self.username})>"


ACCOUNT_CLASSES = {
    AccountRole.BRAND: BrandAccount,
    AccountRole.AGENCY: AgencyAccount,
    AccountRole.INFLUENCER: InfluencerAccount,
    AccountRole.INDIVIDUAL: IndividualAccount,
}
