"""Enumerations shared by the account, niche and campaign models."""

import enum


class AccountRole(str, enum.Enum):
    """Declared role of an account; fixed at registration."""

    BRAND = "brand"
    AGENCY = "agency"
    INFLUENCER = "influencer"
    INDIVIDUAL = "individual"


class Platform(str, enum.Enum):
    """Social platforms a campaign can target or an influencer can list."""

    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    YOUTUBE = "youtube"
    WHATSAPP = "whatsapp"


class NicheCategory(str, enum.Enum):
    """Fixed set of categories the niche catalog is drawn from."""

    LIFESTYLE = "lifestyle"
    FASHION = "fashion"
    BEAUTY = "beauty"
    FITNESS = "fitness"
    FOOD = "food"
    MUSIC = "music"
    MOVIE = "movie"
    ENTERTAINMENT = "entertainment"
    TECHNOLOGY = "technology"
    GAMING = "gaming"
    TRAVEL = "travel"
    BUSINESS = "business"


class CampaignStatus(str, enum.Enum):
    """Campaign status values. No transition graph is enforced."""

    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


SPONSOR_ROLES = frozenset({AccountRole.BRAND, AccountRole.AGENCY})
