"""Niche catalog endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from adfluence.database import get_db
from adfluence.models.schemas import NicheView
from adfluence.services.niche_service import list_niches

router = APIRouter()


@router.get("/niches", response_model=List[NicheView])
def get_niches(db: Session = Depends(get_db)):
    """List every niche in the catalog."""
    return [NicheView.model_validate(niche) for niche in list_niches(db)]
