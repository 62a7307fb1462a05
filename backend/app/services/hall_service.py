"""
Hall Service - directory of halls of residence
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from typing import Dict, List, Optional
import logging

from app.core.exceptions import ConflictError, HallNotFoundError, ValidationError
from app.models.hall import Hall
from app.schemas.validation import MAX_HALL_CODE_LENGTH, normalize_hall_code

logger = logging.getLogger("messfeedback.halls")


class HallService:

    async def list_halls(self, db: AsyncSession, active_only: bool = True) -> List[Hall]:
        """Halls ordered by code"""
        query = select(Hall).order_by(Hall.hall_code)
        if active_only:
            query = query.where(Hall.is_active == True)  # noqa: E712
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_hall(self, db: AsyncSession, hall_code: str) -> Optional[Hall]:
        result = await db.execute(
            select(Hall).where(Hall.hall_code == normalize_hall_code(hall_code))
        )
        return result.scalar_one_or_none()

    async def get_hall(self, db: AsyncSession, hall_code: str) -> Hall:
        """Get a hall by code or raise HallNotFoundError"""
        hall = await self.find_hall(db, hall_code)
        if hall is None:
            raise HallNotFoundError(normalize_hall_code(hall_code))
        return hall

    async def create_hall(
        self,
        db: AsyncSession,
        hall_code: str,
        hall_name: str,
        is_active: bool = True
    ) -> Hall:
        """
        Register a hall.

        Raises:
            ValidationError: empty or over-long code, empty name
            ConflictError: code already taken
        """
        code = normalize_hall_code(hall_code)
        if not code or len(code) > MAX_HALL_CODE_LENGTH:
            raise ValidationError(
                f"Hall code must be 1-{MAX_HALL_CODE_LENGTH} characters", field="hall_code"
            )
        if not (hall_name or "").strip():
            raise ValidationError("Hall name is required", field="hall_name")

        if await self.find_hall(db, code):
            raise ConflictError(f"Hall {code} already exists")

        hall = Hall(hall_code=code, hall_name=hall_name.strip(), is_active=is_active)
        db.add(hall)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise ConflictError(f"Hall {code} already exists")
        await db.refresh(hall)

        logger.info(f"Created hall {hall.hall_code}")
        return hall

    async def seed_default_halls(self, db: AsyncSession, halls: Dict[str, str]) -> int:
        """
        Insert any of ``halls`` ({code: name}) that are missing.

        Existing rows are left untouched, so this is safe to run on every
        startup.

        Returns:
            Number of halls created
        """
        result = await db.execute(select(Hall.hall_code))
        existing = set(result.scalars().all())

        created = 0
        for code, name in halls.items():
            code = normalize_hall_code(code)
            if not code or code in existing:
                continue
            db.add(Hall(hall_code=code, hall_name=name, is_active=True))
            existing.add(code)
            created += 1

        if created:
            await db.commit()
            logger.info(f"Seeded {created} hall(s)")
        return created


# Singleton instance
hall_service = HallService()
