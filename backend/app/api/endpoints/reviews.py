from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import List

from app.core.database import get_db
from app.core.exceptions import ReviewNotFoundError
from app.modules.auth.dependencies import get_current_user
from app.schemas.auth import TokenData
from app.schemas.review import ReviewCreate, ReviewResponse, ReviewUpdate
from app.services.review_service import review_service
from app.utils import clock


router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.get("/today", response_model=ReviewResponse)
async def get_today_review(
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """The caller's review for today"""
    review = await review_service.get_by_user_and_date(db, current_user.id, clock.today())
    if not review:
        raise ReviewNotFoundError(message="No review found for today")
    return review


@router.get("/my", response_model=List[ReviewResponse])
async def get_my_reviews(
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await review_service.get_by_user(db, current_user.id)


@router.get("/date/{review_date}", response_model=ReviewResponse)
async def get_review_by_date(
    review_date: date,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """The caller's review for any given day"""
    review = await review_service.get_by_user_and_date(db, current_user.id, review_date)
    if not review:
        raise ReviewNotFoundError(message=f"No review found for {review_date.isoformat()}")
    return review


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    payload: ReviewCreate,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Submit a review. ``reviewDate`` defaults to today and ``hallCode`` to
    the caller's hall.
    """
    data = payload.model_dump()
    data["review_date"] = data.get("review_date") or clock.today()
    data["hall_code"] = data.get("hall_code") or current_user.hall
    return await review_service.create(db, current_user.id, data)


@router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str,
    payload: ReviewUpdate,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Edit today's review; only the fields sent are changed"""
    return await review_service.update(
        db,
        review_id,
        current_user.id,
        payload.model_dump(exclude_unset=True),
    )
