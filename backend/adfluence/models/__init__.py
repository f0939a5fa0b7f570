"""Database models."""

from adfluence.models.enums import AccountRole, Platform, NicheCategory, CampaignStatus
from adfluence.models.account import (
    Account,
    SponsorAccount,
    BrandAccount,
    AgencyAccount,
    InfluencerAccount,
    IndividualAccount,
    SocialMediaProfile,
    ACCOUNT_CLASSES
)
from adfluence.models.session import AccountSession
from adfluence.models.niche import Niche
from adfluence.models.campaign import Campaign, CampaignPlatform

__all__ = [
    "AccountRole",
    "Platform",
    "NicheCategory",
    "CampaignStatus",
    "Account",
    "SponsorAccount",
    "BrandAccount",
    "AgencyAccount",
    "InfluencerAccount",
    "IndividualAccount",
    "SocialMediaProfile",
    "ACCOUNT_CLASSES",
    "AccountSession",
    "Niche",
    "Campaign",
    "CampaignPlatform",
]
