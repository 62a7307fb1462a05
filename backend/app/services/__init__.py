from app.services.auth_service import AuthService, auth_service
from app.services.review_service import ReviewService, review_service
from app.services.complaint_service import ComplaintService, complaint_service
from app.services.hall_service import HallService, hall_service
from app.services.stats_service import StatsService, stats_service

__all__ = [
    "AuthService",
    "auth_service",
    "ReviewService",
    "review_service",
    "ComplaintService",
    "complaint_service",
    "HallService",
    "hall_service",
    "StatsService",
    "stats_service",
]
