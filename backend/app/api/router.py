from fastapi import APIRouter
from app.api.endpoints import auth, reviews, complaints, halls, health

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(reviews.router)
api_router.include_router(complaints.router)
api_router.include_router(halls.router)
