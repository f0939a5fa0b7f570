"""Pydantic schemas for request/response validation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Literal, Optional, Union
from datetime import datetime
from uuid import UUID

from adfluence.models.enums import AccountRole, CampaignStatus, NicheCategory, Platform


class APIModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python, ORM-readable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


# ============================================
# Account Schemas
# ============================================

class RegisterRequest(APIModel):
    """Schema for account registration."""
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255)
    password: str
    role: AccountRole


class LoginRequest(APIModel):
    """Schema for login."""
    email: str
    password: str


class NicheSummary(APIModel):
    id: UUID
    name: str


class SocialMediaProfileView(APIModel):
    platform: Platform
    username: str
    followers: int = 0
    verified: bool = False


class AccountViewBase(APIModel):
    """
    Fields every account variant exposes publicly.

    The password hash and session tokens have no field on any view.
    """
    id: UUID
    name: str
    email: str
    profile_image: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BrandAccountView(AccountViewBase):
    role: Literal["brand"]
    company_name: Optional[str] = None


class AgencyAccountView(AccountViewBase):
    role: Literal["agency"]
    company_name: Optional[str] = None


class InfluencerAccountView(AccountViewBase):
    role: Literal["influencer"]
    niches: List[NicheSummary] = Field(default_factory=list)
    social_media: List[SocialMediaProfileView] = Field(default_factory=list)


class IndividualAccountView(AccountViewBase):
    role: Literal["individual"]


AccountView = Annotated[
    Union[BrandAccountView, AgencyAccountView, InfluencerAccountView, IndividualAccountView],
    Field(discriminator="role")
]

ACCOUNT_VIEWS = {
    AccountRole.BRAND: BrandAccountView,
    AccountRole.AGENCY: AgencyAccountView,
    AccountRole.INFLUENCER: InfluencerAccountView,
    AccountRole.INDIVIDUAL: IndividualAccountView,
}


class AccountSummary(APIModel):
    """Profile fields shown to campaign owners for applicants."""
    id: UUID
    name: str
    profile_image: Optional[str] = None
    followers: int = 0


class CreatorSummary(APIModel):
    id: UUID
    name: str


# ============================================
# Authentication Schemas
# ============================================

class AuthResponse(APIModel):
    """Schema for register/login responses."""
    account: AccountView
    token: str


# ============================================
# Niche Schemas
# ============================================

class NicheView(APIModel):
    id: UUID
    name: str
    category: NicheCategory
    description: Optional[str] = None
    influencer_count: int = 0
    campaign_count: int = 0


# ============================================
# Campaign Schemas
# ============================================

class BudgetRange(APIModel):
    min: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    max: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class CampaignCreate(APIModel):
    """Schema for creating a campaign. Niches are given by id or by name."""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    niches: List[str] = Field(..., min_length=1)
    platforms: List[Platform] = Field(..., min_length=1)
    budget: float = Field(..., ge=0, allow_inf_nan=False)
    budget_range: Optional[BudgetRange] = None
    status: CampaignStatus = CampaignStatus.ACTIVE
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    requirements: Optional[str] = None
    deliverables: Optional[str] = None

    @field_validator("title", "description", "requirements", "deliverables", mode="before")
    @classmethod
    def strip_text(cls, v):
        # Length limits apply to the stripped text
        return v.strip() if isinstance(v, str) else v

    @field_validator("niches")
    @classmethod
    def strip_niches(cls, v):
        cleaned = [item.strip() for item in v if item and item.strip()]
        if not cleaned:
            raise ValueError("At least one niche is required")
        return cleaned

    @model_validator(mode="after")
    def check_ranges(self):
        budget_range = self.budget_range
        if budget_range and budget_range.min is not None and budget_range.max is not None:
            if budget_range.min > budget_range.max:
                raise ValueError("budgetRange.min must not exceed budgetRange.max")
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("startDate must not be after endDate")
        return self


class CampaignBaseView(APIModel):
    id: UUID
    title: str
    description: str
    image: Optional[str] = None
    created_by: CreatorSummary
    niches: List[NicheSummary] = Field(default_factory=list)
    platforms: List[str] = Field(default_factory=list)
    budget: float
    budget_range: Optional[BudgetRange] = None
    status: CampaignStatus
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    requirements: Optional[str] = None
    deliverables: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CampaignView(CampaignBaseView):
    """Public campaign listing; member sets are bare account ids."""
    applicants: List[UUID] = Field(default_factory=list)
    accepted_influencers: List[UUID] = Field(default_factory=list)

    @field_validator("applicants", "accepted_influencers", mode="before")
    @classmethod
    def member_ids(cls, v):
        return [getattr(member, "id", member) for member in v or []]


class BrandCampaignView(CampaignBaseView):
    """Owner's view of a campaign with member profiles resolved."""
    applicants: List[AccountSummary] = Field(default_factory=list)
    accepted_influencers: List[AccountSummary] = Field(default_factory=list)


# ============================================
# Dashboard Schemas
# ============================================

class InfluencerStats(APIModel):
    earnings: float = 0
    active_campaigns: int = 0
    applications: int = 0
    completion_rate: float = 0


class InfluencerCampaigns(APIModel):
    applied: List[CampaignView] = Field(default_factory=list)
    active: List[CampaignView] = Field(default_factory=list)
    completed: List[CampaignView] = Field(default_factory=list)


class InfluencerDashboardResponse(APIModel):
    stats: InfluencerStats
    campaigns: InfluencerCampaigns
    account: AccountView


class BrandDashboardResponse(APIModel):
    campaigns: List[BrandCampaignView]
    account: AccountView


# ============================================
# Generic Response Schemas
# ============================================

class MessageResponse(BaseModel):
    """Generic message response."""
    message: str
    detail: Optional[str] = None
