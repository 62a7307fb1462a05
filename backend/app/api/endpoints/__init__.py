# API endpoints
from . import auth, reviews, complaints, halls, health

__all__ = ["auth", "reviews", "complaints", "halls", "health"]
