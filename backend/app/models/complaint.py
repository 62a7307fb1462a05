from sqlalchemy import Column, String, Text, Date, DateTime, Index
from sqlalchemy.orm import relationship
import enum

from app.core.database import Base
from app.core.types import id_column, user_ref_column
from app.utils.clock import utcnow


class ComplaintMealType(str, enum.Enum):
    """Meal a complaint is about"""
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    SNACKS = "Snacks"
    DINNER = "Dinner"
    GENERAL = "General"


class ComplaintCategory(str, enum.Enum):
    """What went wrong"""
    HYGIENE = "Hygiene"
    TASTE = "Taste"
    QUANTITY = "Quantity"
    BEHAVIOUR = "Behaviour"
    OTHER = "Other"


class Complaint(Base):
    """Immutable complaint record.

    ``user_id`` is kept for abuse tracing only; hall-level views never
    expose it.
    """
    __tablename__ = "complaints"
    __table_args__ = (
        Index("ix_complaints_hall_created", "hall_code", "created_at"),
    )

    id = id_column()
    user_id = user_ref_column(index=True)
    hall_code = Column(String(10), nullable=False)
    meal_type = Column(String(20), nullable=False)
    category = Column(String(20), nullable=False)
    text = Column(Text, nullable=False)
    complaint_date = Column(Date, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="complaints")

    def __repr__(self):
        return f"<Complaint {self.hall_code} {self.category}>"
