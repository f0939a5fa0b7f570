"""Per-entity repositories over the SQLAlchemy session."""

from adfluence.repositories.base import SQLAlchemyRepository
from adfluence.repositories.account_repository import AccountRepository
from adfluence.repositories.session_repository import SessionRepository
from adfluence.repositories.niche_repository import NicheRepository
from adfluence.repositories.campaign_repository import CampaignRepository

__all__ = [
    "SQLAlchemyRepository",
    "AccountRepository",
    "SessionRepository",
    "NicheRepository",
    "CampaignRepository",
]
