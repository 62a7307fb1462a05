from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.rate_limiter import auth_rate_limit
from app.models.user import User
from app.modules.auth.dependencies import get_current_user_record
from app.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserResponse
from app.services.auth_service import auth_service


router = APIRouter(prefix="/auth", tags=["Auth"])


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(auth_rate_limit)],
)
async def signup(
    request: Request,
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db)
):
    """Create an account with an institutional email (rate limited, shared with login)"""
    user, token = await auth_service.signup(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        hall=payload.hall,
        client_ip=_client_ip(request),
    )
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(auth_rate_limit)])
async def login(
    request: Request,
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Exchange email and password for a session token"""
    user, token = await auth_service.login(
        db,
        email=payload.email,
        password=payload.password,
        client_ip=_client_ip(request),
    )
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user_record)):
    """The signed-in user"""
    return current_user
