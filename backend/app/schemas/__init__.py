# Pydantic schemas
from app.schemas.auth import (
    SignupRequest,
    LoginRequest,
    TokenData,
    UserResponse,
    AuthResponse,
)
from app.schemas.review import ReviewCreate, ReviewUpdate, ReviewResponse
from app.schemas.complaint import ComplaintCreate, ComplaintResponse, OwnComplaintResponse
from app.schemas.hall import HallResponse
from app.schemas.stats import DailyStats, WeeklyStats
from app.schemas.validation import ValidationResult, ensure_valid

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "TokenData",
    "UserResponse",
    "AuthResponse",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ComplaintCreate",
    "ComplaintResponse",
    "OwnComplaintResponse",
    "HallResponse",
    "DailyStats",
    "WeeklyStats",
    "ValidationResult",
    "ensure_valid",
]
