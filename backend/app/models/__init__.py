# Re-export all models for convenient imports
from app.models.user import User
from app.models.hall import Hall
from app.models.review import Review, MealSlot
from app.models.complaint import Complaint, ComplaintMealType, ComplaintCategory

__all__ = [
    "User",
    "Hall",
    "Review",
    "MealSlot",
    "Complaint",
    "ComplaintMealType",
    "ComplaintCategory",
]
