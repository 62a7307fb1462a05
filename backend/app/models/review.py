from sqlalchemy import Column, String, Integer, Text, Date, DateTime, UniqueConstraint, Index
from sqlalchemy.orm import relationship
import enum

from app.core.database import Base
from app.core.types import id_column, user_ref_column
from app.utils.clock import utcnow


class MealSlot(str, enum.Enum):
    """Independently rated meals of the day"""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACKS = "snacks"
    DINNER = "dinner"

    @property
    def rating_field(self) -> str:
        return f"{self.value}_rating"

    @property
    def comment_field(self) -> str:
        return f"{self.value}_comment"


class Review(Base):
    """One student's ratings for one calendar day at one hall"""
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "review_date", name="reviews_user_date_unique"),
        Index("ix_reviews_hall_date", "hall_code", "review_date"),
        Index("ix_reviews_hall_created", "hall_code", "created_at"),
    )

    id = id_column()
    user_id = user_ref_column()
    hall_code = Column(String(10), nullable=False)
    review_date = Column(Date, nullable=False)

    # Each meal: rating 1-5 or NULL, optional comment
    breakfast_rating = Column(Integer, nullable=True)
    breakfast_comment = Column(Text, nullable=True)
    lunch_rating = Column(Integer, nullable=True)
    lunch_comment = Column(Text, nullable=True)
    snacks_rating = Column(Integer, nullable=True)
    snacks_comment = Column(Text, nullable=True)
    dinner_rating = Column(Integer, nullable=True)
    dinner_comment = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="reviews")

    def __repr__(self):
        return f"<Review {self.user_id} {self.review_date}>"
