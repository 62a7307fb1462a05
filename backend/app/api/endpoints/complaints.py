from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.core.rate_limiter import complaint_rate_limit
from app.modules.auth.dependencies import get_current_user
from app.schemas.auth import TokenData
from app.schemas.complaint import ComplaintCreate, ComplaintResponse, OwnComplaintResponse
from app.services.complaint_service import complaint_service
from app.utils import clock


router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.post(
    "",
    response_model=ComplaintResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(complaint_rate_limit)],
)
async def create_complaint(
    payload: ComplaintCreate,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """File a complaint (rate limited per client address)"""
    data = payload.model_dump()
    data["complaint_date"] = data.get("complaint_date") or clock.today()
    data["hall_code"] = data.get("hall_code") or current_user.hall
    return await complaint_service.create(db, current_user.id, data)


@router.get("/my", response_model=List[OwnComplaintResponse])
async def get_my_complaints(
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await complaint_service.get_by_user(db, current_user.id)
