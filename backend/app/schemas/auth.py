from typing import Optional
from datetime import datetime

from app.schemas.base import CamelModel


class SignupRequest(CamelModel):
    name: str
    email: str
    password: str
    hall: Optional[str] = None


class LoginRequest(CamelModel):
    email: str
    password: str


class TokenData(CamelModel):
    """Identity claims embedded in a session token"""
    id: str
    email: str
    hall: str


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    hall: str
    created_at: datetime


class AuthResponse(CamelModel):
    user: UserResponse
    token: str
