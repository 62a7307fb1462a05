"""
Stats Service - per-hall rating aggregates

Averages are computed in the database. AVG ignores NULL ratings, so a
meal nobody rated averages to None rather than 0, and ``total_reviews``
counts reviews whether or not they rated any particular meal.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, cast, Float
from datetime import date
from typing import List, Optional

from app.models.review import Review, MealSlot
from app.schemas.stats import DailyStats, WeeklyStats
from app.schemas.validation import normalize_hall_code
from app.utils import clock


def _meal_average_columns():
    return [
        cast(func.avg(getattr(Review, slot.rating_field)), Float).label(slot.value)
        for slot in MealSlot
    ]


def _as_float(value) -> Optional[float]:
    return float(value) if value is not None else None


class StatsService:
    """Aggregation Engine"""

    async def daily_stats(
        self,
        db: AsyncSession,
        hall_code: str,
        day: Optional[date] = None
    ) -> DailyStats:
        """
        Mean rating per meal and review count for one hall on one day.

        With no reviews every average is None and total_reviews is 0.
        """
        day = day or clock.today()
        query = select(
            *_meal_average_columns(),
            func.count(Review.id).label("total_reviews"),
        ).where(
            Review.hall_code == normalize_hall_code(hall_code),
            Review.review_date == day,
        )
        row = (await db.execute(query)).one()

        return DailyStats(
            total_reviews=row.total_reviews or 0,
            **{slot.value: _as_float(getattr(row, slot.value)) for slot in MealSlot},
        )

    async def weekly_stats(
        self,
        db: AsyncSession,
        hall_code: str,
        end: Optional[date] = None
    ) -> List[WeeklyStats]:
        """
        Per-day meal averages over the 7 days ending on ``end`` (default today).

        Only days with at least one review appear, latest first.
        """
        start, end = clock.trailing_week(end or clock.today())
        query = (
            select(Review.review_date.label("date"), *_meal_average_columns())
            .where(
                Review.hall_code == normalize_hall_code(hall_code),
                Review.review_date >= start,
                Review.review_date <= end,
            )
            .group_by(Review.review_date)
            .order_by(Review.review_date.desc())
        )
        rows = (await db.execute(query)).all()

        return [
            WeeklyStats(
                date=row.date,
                **{slot.value: _as_float(getattr(row, slot.value)) for slot in MealSlot},
            )
            for row in rows
        ]


# Singleton instance
stats_service = StatsService()
