from typing import Optional
import datetime as dt

from app.schemas.base import CamelModel


class MealAverages(CamelModel):
    """Mean rating per meal; None when no rating contributed"""
    breakfast: Optional[float] = None
    lunch: Optional[float] = None
    snacks: Optional[float] = None
    dinner: Optional[float] = None


class DailyStats(MealAverages):
    total_reviews: int = 0


class WeeklyStats(MealAverages):
    date: dt.date
