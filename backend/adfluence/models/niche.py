"""Niche catalog model."""

from sqlalchemy import Column, String, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
import uuid

from adfluence.database import Base


class Niche(Base):
    """
    A named category from the fixed catalog.

    influencer_count and campaign_count are advisory counters; they are not
    kept transactionally in step with live references.
    """

    __tablename__ = "niches"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False, index=True)
    category = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)

    influencer_count = Column(Integer, default=0, nullable=False)
    campaign_count = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<Niche(name={self.name}, category={self.category})>"
