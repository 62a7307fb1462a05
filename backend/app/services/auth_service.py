"""
Auth Service - credential checks and session tokens

Handles:
- Signup with institutional email, hashed password, default hall
- Login with a single failure message for unknown email and wrong password
- Issuing and verifying signed session tokens
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from typing import Optional, Tuple

from app.core.config import settings
from app.core.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)
from app.core.logging_config import logger
from app.core.security import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from app.models.user import User
from app.schemas.auth import TokenData
from app.schemas.validation import (
    ensure_valid,
    normalize_email,
    normalize_hall_code,
    validate_login,
    validate_signup,
)


class AuthService:
    """Credential Service: signup, login, token issue/verify"""

    # Compared against when the email is unknown so both failure paths cost a bcrypt check
    _dummy_hash: Optional[str] = None

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = get_password_hash("not-a-real-password")
        return self._dummy_hash

    async def get_user(self, db: AsyncSession, user_id: str) -> Optional[User]:
        """Get user by ID"""
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Get user by (normalised) email"""
        result = await db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    def issue_token(self, user: User) -> str:
        """Signed token carrying {id, email, hall}"""
        return create_access_token({
            "id": str(user.id),
            "email": user.email,
            "hall": user.hall,
        })

    def verify_token(self, token: str) -> TokenData:
        """
        Validate a token and return its identity claims.

        Raises:
            AuthError subclasses for bad signature, malformed or expired tokens
        """
        payload = decode_token(token)
        return TokenData(id=payload["id"], email=payload["email"], hall=payload["hall"])

    async def signup(
        self,
        db: AsyncSession,
        name: str,
        email: str,
        password: str,
        hall: Optional[str] = None,
        client_ip: Optional[str] = None,
    ) -> Tuple[User, str]:
        """
        Create an account and sign the user in.

        Returns:
            (user, token)

        Raises:
            ValidationError: bad domain, short password or name
            EmailAlreadyRegisteredError: email already has an account
        """
        result = validate_signup(name, email, password, hall)
        if not result.ok:
            logger.log_auth_event(
                event="signup",
                success=False,
                user_email=normalize_email(email),
                reason=result.message,
                client_ip=client_ip,
            )
        ensure_valid(result)

        email = normalize_email(email)
        if await self.get_user_by_email(db, email):
            logger.log_auth_event(
                event="signup",
                success=False,
                user_email=email,
                reason="Email already registered",
                client_ip=client_ip,
            )
            raise EmailAlreadyRegisteredError()

        user = User(
            name=name.strip(),
            email=email,
            hashed_password=get_password_hash(password),
            hall=normalize_hall_code(hall) or settings.DEFAULT_HALL_CODE,
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            await db.rollback()
            raise EmailAlreadyRegisteredError()
        await db.refresh(user)

        logger.log_auth_event(
            event="signup",
            success=True,
            user_email=user.email,
            client_ip=client_ip,
            hall=user.hall,
        )
        return user, self.issue_token(user)

    async def login(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        client_ip: Optional[str] = None,
    ) -> Tuple[User, str]:
        """
        Check credentials and issue a token.

        Raises:
            InvalidCredentialsError: unknown email or wrong password (same message)
        """
        ensure_valid(validate_login(email, password))

        user = await self.get_user_by_email(db, email)
        if user is None:
            verify_password(password, self._get_dummy_hash())
            logger.log_auth_event(
                event="login",
                success=False,
                user_email=normalize_email(email),
                reason="Unknown email",
                client_ip=client_ip,
            )
            raise InvalidCredentialsError()

        if not verify_password(password, user.hashed_password):
            logger.log_auth_event(
                event="login",
                success=False,
                user_email=user.email,
                reason="Wrong password",
                client_ip=client_ip,
            )
            raise InvalidCredentialsError()

        logger.log_auth_event(
            event="login",
            success=True,
            user_email=user.email,
            client_ip=client_ip,
        )
        return user, self.issue_token(user)


# Singleton instance
auth_service = AuthService()
