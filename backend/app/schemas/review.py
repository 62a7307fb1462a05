from pydantic import StrictInt
from typing import Optional
from datetime import date, datetime

from app.schemas.base import CamelModel


class ReviewMeals(CamelModel):
    """Rating (1-5) and comment for each meal, all optional"""
    breakfast_rating: Optional[StrictInt] = None
    breakfast_comment: Optional[str] = None
    lunch_rating: Optional[StrictInt] = None
    lunch_comment: Optional[str] = None
    snacks_rating: Optional[StrictInt] = None
    snacks_comment: Optional[str] = None
    dinner_rating: Optional[StrictInt] = None
    dinner_comment: Optional[str] = None


class ReviewCreate(ReviewMeals):
    hall_code: Optional[str] = None
    review_date: Optional[date] = None


class ReviewUpdate(ReviewMeals):
    """Partial update - only fields present in the body are applied"""


class ReviewResponse(CamelModel):
    id: str
    user_id: str
    hall_code: str
    review_date: date
    breakfast_rating: Optional[int] = None
    breakfast_comment: Optional[str] = None
    lunch_rating: Optional[int] = None
    lunch_comment: Optional[str] = None
    snacks_rating: Optional[int] = None
    snacks_comment: Optional[str] = None
    dinner_rating: Optional[int] = None
    dinner_comment: Optional[str] = None
    created_at: datetime
    updated_at: datetime
