"""Password hashing and JWT credentials for the API"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from uuid import UUID
from jose import JWTError, jwt
import bcrypt

from scafflow.config import settings
from scafflow.exceptions import Unauthenticated

TOKEN_ISSUER = "scafflow-api"
BCRYPT_ROUNDS = 12

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def _signing_key() -> str:
    return settings.jwt_secret or settings.secret_key


def _default_lifetime(token_type: str) -> timedelta:
    if token_type == ACCESS_TOKEN:
        return timedelta(hours=settings.jwt_expiration_hours)
    return timedelta(hours=settings.refresh_expiration_hours)


class AuthService:
    """
    Credential primitives shared by signup, login, refresh and AuthGate.

    Access tokens carry the caller's email and role for clients; the API
    itself only trusts the subject and re-reads the user on each request.
    """

    @staticmethod
    def hash_password(password: str) -> str:
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """False for a wrong password or a stored value that is not a bcrypt hash"""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False

    @staticmethod
    def issue_token(
        subject: str,
        token_type: str,
        lifetime: Optional[timedelta] = None,
        **claims: Any
    ) -> str:
        """
        Sign a token for a subject.

        Args:
            subject: User id placed in the sub claim
            token_type: ACCESS_TOKEN or REFRESH_TOKEN
            lifetime: Overrides the configured lifetime for the type
            **claims: Extra claims to embed

        Returns:
            Encoded JWT
        """
        issued_at = datetime.utcnow()
        payload = {
            **claims,
            "sub": subject,
            "type": token_type,
            "iss": TOKEN_ISSUER,
            "iat": issued_at,
            "exp": issued_at + (lifetime or _default_lifetime(token_type)),
        }
        return jwt.encode(payload, _signing_key(), algorithm=settings.jwt_algorithm)

    @staticmethod
    def create_access_token(user_id: str, email: str, role: str) -> str:
        return AuthService.issue_token(user_id, ACCESS_TOKEN, email=email, role=role)

    @staticmethod
    def create_refresh_token(user_id: str) -> str:
        return AuthService.issue_token(user_id, REFRESH_TOKEN)

    @staticmethod
    def decode_token(token: str) -> Optional[Dict[str, Any]]:
        """Claims of a correctly signed, unexpired token from this issuer, else None"""
        try:
            return jwt.decode(
                token,
                _signing_key(),
                algorithms=[settings.jwt_algorithm],
                issuer=TOKEN_ISSUER,
            )
        except JWTError:
            return None

    @staticmethod
    def validate_token(token: str, token_type: str = ACCESS_TOKEN) -> Optional[Dict[str, Any]]:
        """decode_token restricted to one token type"""
        payload = AuthService.decode_token(token)
        if payload is None or payload.get("type") != token_type:
            return None
        return payload

    @staticmethod
    def subject_id(payload: Dict[str, Any]) -> UUID:
        """
        User id from a validated token.

        Raises:
            Unauthenticated: If the sub claim is missing or not a UUID
        """
        try:
            return UUID(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise Unauthenticated("Invalid user ID in token")
