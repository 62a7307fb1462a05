"""
Complaint Service - append-only complaint records
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Any, Dict, List, Optional
import logging

from app.core.config import settings
from app.models.complaint import Complaint
from app.schemas.validation import (
    ensure_valid,
    normalize_hall_code,
    validate_complaint,
)
from app.utils import clock

logger = logging.getLogger("messfeedback.complaints")


class ComplaintService:
    """Complaint Store: create and list, never edit or delete"""

    async def create(self, db: AsyncSession, user_id: str, payload: Dict[str, Any]) -> Complaint:
        """
        Store a complaint.

        Raises:
            ValidationError: unknown meal type or category, text outside
                10-2000 characters as submitted, blank text, missing hall or date
        """
        ensure_valid(validate_complaint(payload))

        complaint = Complaint(
            user_id=user_id,
            hall_code=normalize_hall_code(payload["hall_code"]),
            meal_type=payload["meal_type"],
            category=payload["category"],
            text=payload["text"].strip(),
            complaint_date=payload["complaint_date"],
            created_at=clock.utcnow(),
        )
        db.add(complaint)
        await db.commit()
        await db.refresh(complaint)

        logger.info(
            f"Complaint {complaint.id} filed for {complaint.hall_code} ({complaint.category})",
            extra={"event_type": "complaint_created", "complaint_id": complaint.id},
        )
        return complaint

    async def get_by_hall(
        self,
        db: AsyncSession,
        hall_code: str,
        limit: Optional[int] = None
    ) -> List[Complaint]:
        """Most recent complaints for a hall"""
        result = await db.execute(
            select(Complaint)
            .where(Complaint.hall_code == normalize_hall_code(hall_code))
            .order_by(Complaint.created_at.desc())
            .limit(settings.RECENT_ACTIVITY_LIMIT if limit is None else limit)
        )
        return list(result.scalars().all())

    async def get_by_user(self, db: AsyncSession, user_id: str) -> List[Complaint]:
        result = await db.execute(
            select(Complaint)
            .where(Complaint.user_id == user_id)
            .order_by(Complaint.created_at.desc())
        )
        return list(result.scalars().all())


# Singleton instance
complaint_service = ComplaintService()
