"""Campaign endpoints."""

from datetime import datetime
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session
from typing import List, Optional

from adfluence.database import get_db
from adfluence.errors import ValidationError
from adfluence.models.account import Account
from adfluence.models.schemas import CampaignCreate, CampaignView, MessageResponse
from adfluence.middleware.auth import get_current_account
from adfluence.services.authorization import CAMPAIGN_CREATORS, require_role
from adfluence.services.campaign_service import CampaignService
from adfluence.services.upload_service import upload_store

router = APIRouter()


def _schema_error_message(error: SchemaValidationError) -> str:
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(problems)


@router.post("/campaigns", response_model=CampaignView, status_code=status.HTTP_201_CREATED)
def create_campaign(
    title: str = Form(...),
    description: str = Form(...),
    budget: float = Form(...),
    niches: List[str] = Form(...),
    platforms: List[str] = Form(...),
    budget_min: Optional[float] = Form(None, alias="budgetMin"),
    budget_max: Optional[float] = Form(None, alias="budgetMax"),
    campaign_status: Optional[str] = Form(None, alias="status"),
    start_date: Optional[datetime] = Form(None, alias="startDate"),
    end_date: Optional[datetime] = Form(None, alias="endDate"),
    requirements: Optional[str] = Form(None),
    deliverables: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db)
):
    """
    Post a campaign as a brand or agency.

    Multipart form; niches and platforms repeat once per value. An optional
    image file is stored and referenced from the campaign.
    """
    # Reject before touching the upload store
    require_role(account, CAMPAIGN_CREATORS, "Only brands and agencies can create campaigns")

    fields = {
        "title": title,
        "description": description,
        "budget": budget,
        "niches": niches,
        "platforms": platforms,
        "start_date": start_date,
        "end_date": end_date,
        "requirements": requirements,
        "deliverables": deliverables,
    }
    if budget_min is not None or budget_max is not None:
        fields["budget_range"] = {"min": budget_min, "max": budget_max}
    if campaign_status:
        fields["status"] = campaign_status

    try:
        data = CampaignCreate.model_validate(fields)
    except SchemaValidationError as e:
        raise ValidationError(_schema_error_message(e))

    image_path = upload_store.save_image(image) if image and image.filename else None

    try:
        campaign = CampaignService.create_campaign(db, account, data, image=image_path)
    except Exception:
        if image_path:
            upload_store.discard(image_path)
        raise
    return CampaignView.model_validate(campaign)


@router.get("/campaigns", response_model=List[CampaignView])
def list_campaigns(
    niche: Optional[str] = Query(None),
    platform: Optional[str] = Query(None),
    min_budget: Optional[float] = Query(None, alias="minBudget"),
    max_budget: Optional[float] = Query(None, alias="maxBudget"),
    db: Session = Depends(get_db)
):
    """
    Public campaign search.

    Filters are optional and combine; budget bounds are inclusive.
    """
    campaigns = CampaignService.list_campaigns(
        db,
        niche=niche,
        platform=platform,
        min_budget=min_budget,
        max_budget=max_budget
    )
    return [CampaignView.model_validate(campaign) for campaign in campaigns]


@router.post("/campaigns/{campaign_id}/apply", response_model=MessageResponse)
def apply_to_campaign(
    campaign_id: str,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db)
):
    """
    Apply to a campaign as an influencer.

    Requires:
        Authorization: Bearer <token>
    """
    CampaignService.apply(db, account, campaign_id)
    return MessageResponse(message="Application submitted successfully")
