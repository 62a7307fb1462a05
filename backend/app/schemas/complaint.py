from typing import Optional
from datetime import date, datetime

from app.schemas.base import CamelModel


class ComplaintCreate(CamelModel):
    meal_type: str
    category: str
    text: str
    hall_code: Optional[str] = None
    complaint_date: Optional[date] = None


class ComplaintResponse(CamelModel):
    """Hall-level view: no submitter identity"""
    id: str
    hall_code: str
    meal_type: str
    category: str
    text: str
    complaint_date: date
    created_at: datetime


class OwnComplaintResponse(ComplaintResponse):
    user_id: str
