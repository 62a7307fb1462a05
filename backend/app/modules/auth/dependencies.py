from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.database import get_db
from app.core.exceptions import AuthError
from app.core.logging_config import set_user_id
from app.models.user import User
from app.schemas.auth import TokenData
from app.services.auth_service import auth_service

# auto_error=False so a missing header becomes our AuthError (401), not a 403
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenData:
    """Identity from the bearer token; no database round trip"""
    if credentials is None or not credentials.credentials:
        raise AuthError("Authentication required")

    token_data = auth_service.verify_token(credentials.credentials)
    # Context var covers logs written by the route; request.state reaches the access log
    set_user_id(token_data.id)
    request.state.user_id = token_data.id
    return token_data


async def get_current_user_record(
    token_data: TokenData = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Load the account behind the token; 401 if it no longer exists"""
    user = await auth_service.get_user(db, token_data.id)
    if not user:
        raise AuthError("User not found")
    return user
