"""Niche catalog persistence."""

from typing import Iterable, List, Optional
from uuid import UUID

from adfluence.models.niche import Niche
from adfluence.repositories.base import SQLAlchemyRepository


def parse_uuid(value) -> Optional[UUID]:
    """UUID from a string, or None when it is not one."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (ValueError, TypeError):
        return None


class NicheRepository(SQLAlchemyRepository[Niche]):
    model = Niche

    def list_all(self) -> List[Niche]:
        return self.query().order_by(Niche.name).all()

    def find_by_name(self, name: str) -> Optional[Niche]:
        return self.query().filter(Niche.name == name).first()

    def resolve(self, identifier: str) -> Optional[Niche]:
        """Look a niche up by id, falling back to its name."""
        niche_id = parse_uuid(identifier)
        if niche_id is not None:
            niche = self.find_by_id(niche_id)
            if niche:
                return niche
        return self.find_by_name(identifier)

    def increment_campaign_counts(self, niches: Iterable[Niche]) -> None:
        """Bump the advisory campaign counters; committed with the caller's unit of work."""
        for niche in niches:
            niche.campaign_count = (niche.campaign_count or 0) + 1
