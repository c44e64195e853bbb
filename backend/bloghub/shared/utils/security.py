"""
Password hashing (passlib bcrypt) and signed bearer tokens (PyJWT).

A token is the author's public identity plus "exp" and "iat":

    {"id": "550e8400-...", "name": "Priya Sharma", "username": "priya_s",
     "email": "priya@example.com", "role": "user", "exp": 1712736400, "iat": 1712650000}

Decoding failures of any kind surface as ValueError so callers deal with a
single exception type, whatever PyJWT raised underneath.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# A token missing any of these is rejected even if the signature holds
REQUIRED_CLAIMS = ("id", "exp", "iat")


class SecurityUtils:

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def create_access_token(
        claims: dict[str, Any],
        secret_key: str,
        expires_delta: timedelta,
        algorithm: str = "HS256",
    ) -> str:
        now = datetime.now(timezone.utc)
        return jwt.encode(
            {**claims, "iat": now, "exp": now + expires_delta},
            secret_key,
            algorithm=algorithm,
        )

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict[str, Any]:
        """
        Return the payload of a token signed with secret_key.

        Raises:
            ValueError: "Token has expired", or "Invalid token: ..." for a bad
                signature, a malformed token or a missing required claim
        """
        options = {"require": list(REQUIRED_CLAIMS)}
        try:
            return jwt.decode(token, secret_key, algorithms=[algorithm], options=options)
        except jwt.ExpiredSignatureError as exc:
            raise ValueError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise ValueError(f"Invalid token: {exc}") from exc
