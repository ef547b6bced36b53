"""
Authentication Service

Business logic for signup, login, token refresh, account activation and
password reset.

Token Flow:
===========
    signup / login ──▶ access token (ACCESS_TOKEN_EXPIRE_MINUTES)
    refresh        ──▶ new access token for the same user
    request reset  ──▶ reset token (RESET_TOKEN_EXPIRE_MINUTES), digest of
                       its nonce stored on the user; single use
    resend         ──▶ activation token (ACTIVATION_TOKEN_EXPIRE_MINUTES)

Reset and activation tokens are written to the log instead of being mailed.

Usage:
======
    service = AuthService(db)
    user, token, expires_in = await service.signup("Aoi", "aoi@example.com", "secret123")
"""

from datetime import datetime, timedelta, timezone
from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.core.exceptions import (
    AuthenticationError,
    ConflictError,
    UserNotFoundError,
    ValidationError,
)
from src.shared.core.logging import logger
from src.shared.models.user import User
from src.shared.repositories.user_repository import UserRepository
from src.shared.utils.security import (
    PURPOSE_ACTIVATION,
    PURPOSE_RESET,
    SecurityUtils,
)


class AuthService:
    """
    Service for authentication-related business logic.

    Attributes:
        session: Database session
        repo: UserRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # SIGNUP / LOGIN
    # ═══════════════════════════════════════════════════════════════════════════

    async def signup(self, name: str, email: str, password: str) -> Tuple[User, str, int]:
        """
        Register a new, immediately activated user.

        Returns:
            Tuple of (user, access_token, expires_in_seconds)

        Raises:
            ConflictError: If email already registered
        """
        if await self.repo.email_exists(email):
            raise ConflictError("email already registered")

        user = await self.repo.create(
            name=name,
            email=email,
            password_hash=SecurityUtils.hash_password(password),
            activated=True,
            activated_at=datetime.now(timezone.utc),
        )
        logger.info("User signed up", user_id=user.id)

        token, expires_in = self.issue_access_token(user)
        return user, token, expires_in

    async def login(self, email: str, password: str) -> Tuple[User, str, int]:
        """
        Authenticate user and generate token.

        Raises:
            AuthenticationError: Invalid credentials or account not activated
        """
        user = await self.repo.get_by_email(email)
        if not user or not SecurityUtils.verify_password(password, user.password_hash):
            raise AuthenticationError("invalid email or password")

        if not user.activated:
            raise AuthenticationError("account not activated")

        logger.info("User logged in", user_id=user.id)
        token, expires_in = self.issue_access_token(user)
        return user, token, expires_in

    async def refresh_token(self, token: str) -> Tuple[str, int]:
        """
        Exchange a valid access token for a fresh one.

        Raises:
            AuthenticationError: Token invalid or expired, or user gone
        """
        try:
            payload = SecurityUtils.decode_access_token(
                token,
                settings.SECRET_KEY,
                algorithm=settings.JWT_ALGORITHM,
            )
        except ValueError as e:
            raise AuthenticationError(str(e))

        user = await self.repo.get(payload["user_id"])
        if not user:
            raise AuthenticationError("user no longer exists")
        return self.issue_access_token(user)

    def issue_access_token(self, user: User) -> Tuple[str, int]:
        token = SecurityUtils.create_access_token(
            data={"user_id": user.id, "email": user.email},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )
        return token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD RESET
    # ═══════════════════════════════════════════════════════════════════════════

    async def request_password_reset(self, email: str) -> str:
        """
        Issue a single-use reset token for `email`.

        Returns:
            The reset token (delivered out of band)

        Raises:
            UserNotFoundError: No user with that email
        """
        user = await self.repo.get_by_email(email)
        if not user:
            raise UserNotFoundError(email)

        nonce = SecurityUtils.generate_nonce()
        token = SecurityUtils.create_access_token(
            data={"user_id": user.id, "email": user.email, "nonce": nonce},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
            purpose=PURPOSE_RESET,
        )
        await self.repo.apply(user, {
            "reset_digest": SecurityUtils.digest(nonce),
            "reset_sent_at": datetime.now(timezone.utc),
        })

        logger.info("Password reset requested", user_id=user.id)
        logger.debug("Password reset token issued", user_id=user.id, token=token)
        return token

    async def reset_password(self, token: str, new_password: str) -> User:
        """
        Set a new password using a reset token.

        Raises:
            ValidationError: Token invalid, expired or already used
        """
        try:
            payload = SecurityUtils.decode_access_token(
                token,
                settings.SECRET_KEY,
                algorithm=settings.JWT_ALGORITHM,
                purpose=PURPOSE_RESET,
            )
        except ValueError as e:
            raise ValidationError("invalid or expired reset token", details={"reason": str(e)})

        user = await self.repo.get(payload["user_id"])
        if (
            not user
            or not user.reset_digest
            or user.reset_digest != SecurityUtils.digest(payload.get("nonce", ""))
        ):
            raise ValidationError("invalid or expired reset token")

        user = await self.repo.apply(user, {
            "password_hash": SecurityUtils.hash_password(new_password),
            "reset_digest": None,
            "reset_sent_at": None,
        })
        logger.info("Password reset completed", user_id=user.id)
        return user

    # ═══════════════════════════════════════════════════════════════════════════
    # ACTIVATION
    # ═══════════════════════════════════════════════════════════════════════════

    async def issue_activation_token(self, user: User) -> str:
        token = SecurityUtils.create_access_token(
            data={"user_id": user.id, "email": user.email},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACTIVATION_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
            purpose=PURPOSE_ACTIVATION,
        )
        logger.debug("Activation token issued", user_id=user.id, token=token)
        return token

    async def resend_activation(self, email: str) -> str:
        """
        Raises:
            UserNotFoundError: No user with that email
            ConflictError: Account already activated
        """
        user = await self.repo.get_by_email(email)
        if not user:
            raise UserNotFoundError(email)
        if user.activated:
            raise ConflictError("account already activated")
        return await self.issue_activation_token(user)

    async def activate_account(self, token: str) -> User:
        """
        Activate the account named by an activation token. Activating an
        already active account is a no-op.

        Raises:
            ValidationError: Token invalid or expired
            UserNotFoundError: Account no longer exists
        """
        try:
            payload = SecurityUtils.decode_access_token(
                token,
                settings.SECRET_KEY,
                algorithm=settings.JWT_ALGORITHM,
                purpose=PURPOSE_ACTIVATION,
            )
        except ValueError as e:
            raise ValidationError("invalid or expired activation token", details={"reason": str(e)})

        user = await self.repo.get(payload["user_id"])
        if not user:
            raise UserNotFoundError(payload["user_id"])
        if user.activated:
            return user

        user = await self.repo.apply(user, {
            "activated": True,
            "activated_at": datetime.now(timezone.utc),
        })
        logger.info("Account activated", user_id=user.id)
        return user
