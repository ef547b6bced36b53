"""
Security Utilities

Password hashing and JWT token management.

Password Hashing:
=================
bcrypt through passlib's CryptContext (salt generated per hash).

JWT Tokens:
===========
PyJWT, HS256 by default. Besides access tokens, short-lived purpose tokens
are issued for account activation and password reset. Every token carries a
`purpose` claim so one kind can never be replayed as another:

    access      → {"user_id": 3, "email": "...", "purpose": "access"}
    activation  → {"user_id": 3, "email": "...", "purpose": "activation"}
    reset       → {"user_id": 3, "email": "...", "purpose": "reset", "nonce": "..."}

Usage:
======
    from src.shared.utils.security import SecurityUtils

    hashed = SecurityUtils.hash_password("password123")
    SecurityUtils.verify_password("password123", hashed)  # True

    token = SecurityUtils.create_access_token(
        data={"user_id": 3, "email": "a@example.com"},
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(hours=24),
    )
    payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
"""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)

PURPOSE_ACCESS = "access"
PURPOSE_ACTIVATION = "activation"
PURPOSE_RESET = "reset"


class SecurityUtils:
    """
    Security utilities for authentication.

    Provides:
    - Password hashing with bcrypt
    - JWT creation and validation, scoped by purpose
    - Digests for single-use tokens stored server side
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Bcrypt hash string (includes salt)
        """
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
        purpose: str = PURPOSE_ACCESS,
    ) -> str:
        """
        Create a signed JWT.

        Args:
            data: Payload claims (e.g., user_id, email)
            secret_key: Secret key for signing
            expires_delta: Token lifetime (default: 24 hours)
            algorithm: JWT algorithm
            purpose: access / activation / reset

        Returns:
            Encoded JWT token string
        """
        now = datetime.now(timezone.utc)
        to_encode = data.copy()
        to_encode.update({
            "exp": now + (expires_delta or timedelta(hours=24)),
            "iat": now,
            "purpose": purpose,
        })
        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
        purpose: str = PURPOSE_ACCESS,
    ) -> dict:
        """
        Decode and verify a JWT issued for `purpose`.

        Returns:
            Decoded token payload

        Raises:
            ValueError: If token is expired, invalid or issued for another purpose

        Example:
            try:
                payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
            except ValueError as e:
                raise AuthenticationError(str(e))
        """
        try:
            payload = jwt.decode(token, secret_key, algorithms=[algorithm])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")

        if payload.get("purpose", PURPOSE_ACCESS) != purpose:
            raise ValueError("Invalid token: wrong purpose")
        return payload

    # ═══════════════════════════════════════════════════════════════════════════
    # SINGLE-USE TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def generate_nonce() -> str:
        return secrets.token_urlsafe(16)

    @staticmethod
    def digest(value: str) -> str:
        """sha256 hex digest, stored instead of the raw token."""
        return hashlib.sha256(value.encode()).hexdigest()
