from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import List, Optional

from app.core.database import get_db
from app.modules.auth.dependencies import get_current_user
from app.schemas.auth import TokenData
from app.schemas.complaint import ComplaintResponse
from app.schemas.hall import HallResponse
from app.schemas.review import ReviewResponse
from app.schemas.stats import DailyStats, WeeklyStats
from app.services.complaint_service import complaint_service
from app.services.hall_service import hall_service
from app.services.review_service import review_service
from app.services.stats_service import stats_service
from app.utils import clock


router = APIRouter(prefix="/halls", tags=["Halls"])


@router.get("", response_model=List[HallResponse])
async def list_halls(
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await hall_service.list_halls(db)


@router.get("/{hall_code}", response_model=HallResponse)
async def get_hall(
    hall_code: str,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await hall_service.get_hall(db, hall_code)


# ==================== Stats ====================

@router.get("/{hall_code}/stats/today", response_model=DailyStats)
async def get_today_stats(
    hall_code: str,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Per-meal averages and review count for today"""
    return await stats_service.daily_stats(db, hall_code, clock.today())


@router.get("/{hall_code}/stats/daily", response_model=DailyStats)
async def get_daily_stats(
    hall_code: str,
    day: Optional[date] = Query(None, alias="date"),
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Per-meal averages and review count for ?date=YYYY-MM-DD (default today)"""
    return await stats_service.daily_stats(db, hall_code, day or clock.today())


@router.get("/{hall_code}/stats/weekly", response_model=List[WeeklyStats])
async def get_weekly_stats(
    hall_code: str,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Daily averages for the last 7 days; days without reviews are omitted"""
    return await stats_service.weekly_stats(db, hall_code)


# ==================== Recent activity ====================

@router.get("/{hall_code}/reviews/recent", response_model=List[ReviewResponse])
async def get_recent_reviews(
    hall_code: str,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await review_service.get_by_hall(db, hall_code)


@router.get("/{hall_code}/complaints/recent", response_model=List[ComplaintResponse])
async def get_recent_complaints(
    hall_code: str,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Recent complaints without submitter identity"""
    return await complaint_service.get_by_hall(db, hall_code)
