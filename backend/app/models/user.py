from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.core.types import id_column
from app.utils.clock import utcnow


class User(Base):
    """Student account - one per institutional email"""
    __tablename__ = "users"

    id = id_column()
    name = Column(Text, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    hall = Column(String(10), nullable=False, default="RK")

    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    reviews = relationship("Review", back_populates="user", cascade="all, delete-orphan")
    complaints = relationship("Complaint", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.email}>"
