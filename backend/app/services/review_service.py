"""
Review Service - daily meal reviews

One review per user per calendar day, enforced by the
``reviews_user_date_unique`` constraint. The pre-insert lookup only gives a
friendlier error; the constraint decides concurrent races.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from datetime import date
from typing import Any, Dict, List, Optional
import logging

from app.core.config import settings
from app.core.exceptions import (
    DuplicateReviewError,
    ForbiddenError,
    ReviewEditWindowClosedError,
    ReviewNotFoundError,
)
from app.models.review import Review, MealSlot
from app.schemas.validation import (
    ensure_valid,
    normalize_hall_code,
    validate_review_payload,
)
from app.utils import clock

logger = logging.getLogger("messfeedback.reviews")

# Fields a same-day edit may change
EDITABLE_FIELDS = tuple(
    field for slot in MealSlot for field in (slot.rating_field, slot.comment_field)
)


class ReviewService:
    """Review Store"""

    async def get_review(self, db: AsyncSession, review_id: str) -> Optional[Review]:
        """Get review by ID"""
        result = await db.execute(select(Review).where(Review.id == review_id))
        return result.scalar_one_or_none()

    async def get_by_user_and_date(
        self,
        db: AsyncSession,
        user_id: str,
        review_date: date
    ) -> Optional[Review]:
        """The user's review for exactly that day, or None"""
        result = await db.execute(
            select(Review).where(
                Review.user_id == user_id,
                Review.review_date == review_date,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_user(self, db: AsyncSession, user_id: str) -> List[Review]:
        """All of a user's reviews, latest review date first"""
        result = await db.execute(
            select(Review)
            .where(Review.user_id == user_id)
            .order_by(Review.review_date.desc())
        )
        return list(result.scalars().all())

    async def get_by_hall(
        self,
        db: AsyncSession,
        hall_code: str,
        limit: Optional[int] = None
    ) -> List[Review]:
        """Most recently created reviews for a hall"""
        result = await db.execute(
            select(Review)
            .where(Review.hall_code == normalize_hall_code(hall_code))
            .order_by(Review.created_at.desc())
            .limit(settings.RECENT_ACTIVITY_LIMIT if limit is None else limit)
        )
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, user_id: str, payload: Dict[str, Any]) -> Review:
        """
        Create the user's review for ``payload['review_date']``.

        Args:
            db: Database session
            user_id: Owner of the review
            payload: snake_case review fields

        Raises:
            ValidationError: rating outside 1-5, missing date or hall
            DuplicateReviewError: the user already reviewed that day
        """
        ensure_valid(validate_review_payload(payload))

        review_date = payload["review_date"]
        if await self.get_by_user_and_date(db, user_id, review_date):
            raise DuplicateReviewError(review_date.isoformat())

        now = clock.utcnow()
        review = Review(
            user_id=user_id,
            hall_code=normalize_hall_code(payload["hall_code"]),
            review_date=review_date,
            created_at=now,
            updated_at=now,
            **{field: payload.get(field) for field in EDITABLE_FIELDS},
        )
        db.add(review)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise DuplicateReviewError(review_date.isoformat())
        await db.refresh(review)

        logger.info(
            f"Created review {review.id} for {review.hall_code} on {review.review_date}",
            extra={"event_type": "review_created", "review_id": review.id},
        )
        return review

    async def update(
        self,
        db: AsyncSession,
        review_id: str,
        user_id: str,
        payload: Dict[str, Any]
    ) -> Review:
        """
        Merge meal fields into an existing review.

        Only keys present in ``payload`` are applied; an explicit None clears
        a rating or comment. The review date and hall cannot be changed.

        Raises:
            ValidationError: bad rating, or the review is not for today
            ReviewNotFoundError: no such review
            ForbiddenError: caller does not own the review
        """
        ensure_valid(validate_review_payload(payload, partial=True))

        review = await self.get_review(db, review_id)
        if review is None:
            raise ReviewNotFoundError(review_id)

        if str(review.user_id) != str(user_id):
            raise ForbiddenError("You can only edit your own reviews")

        if review.review_date != clock.today():
            raise ReviewEditWindowClosedError(review.review_date.isoformat())

        for field in EDITABLE_FIELDS:
            if field in payload:
                setattr(review, field, payload[field])
        review.updated_at = clock.utcnow()

        await db.commit()
        await db.refresh(review)

        logger.info(
            f"Updated review {review.id}",
            extra={"event_type": "review_updated", "review_id": review.id},
        )
        return review


# Singleton instance
review_service = ReviewService()
