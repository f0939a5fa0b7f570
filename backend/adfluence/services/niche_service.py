"""Niche catalog queries and seeding."""

from typing import List

from sqlalchemy.orm import Session

from adfluence.models.enums import NicheCategory
from adfluence.models.niche import Niche
from adfluence.repositories.niche_repository import NicheRepository
from adfluence.services.logging_service import logger


DEFAULT_NICHES = {
    NicheCategory.LIFESTYLE: "Everyday living, home and wellbeing",
    NicheCategory.FASHION: "Clothing, accessories and style",
    NicheCategory.BEAUTY: "Makeup, skincare and haircare",
    NicheCategory.FITNESS: "Workouts, sport and healthy habits",
    NicheCategory.FOOD: "Cooking, recipes and restaurants",
    NicheCategory.MUSIC: "Artists, releases and performances",
    NicheCategory.MOVIE: "Film reviews, trailers and cinema",
    NicheCategory.ENTERTAINMENT: "Comedy, celebrities and pop culture",
    NicheCategory.TECHNOLOGY: "Gadgets, software and reviews",
    NicheCategory.GAMING: "Games, streaming and esports",
    NicheCategory.TRAVEL: "Destinations, hotels and adventure",
    NicheCategory.BUSINESS: "Entrepreneurship, finance and careers",
}


def list_niches(db: Session) -> List[Niche]:
    """Every niche in the catalog, ordered by name."""
    return NicheRepository(db).list_all()


def seed_default_niches(db: Session) -> int:
    """
    Insert one niche per catalog category if it is missing.

    Safe to run on every startup.

    Returns:
        Number of niches created
    """
    niches = NicheRepository(db)
    created = 0

    for category, description in DEFAULT_NICHES.items():
        if niches.find_by_name(category.value):
            continue
        db.add(Niche(name=category.value, category=category.value, description=description))
        created += 1

    if created:
        niches.commit()
        logger.info("Niche catalog seeded", created=created)

    return created
