"""Bearer credential verification producing a caller Identity"""

import logging
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.exceptions import Unauthenticated
from scafflow.models.user import User
from scafflow.services.auth_service import ACCESS_TOKEN, AuthService
from scafflow.services.ownership_policy import Identity
from scafflow.services.redis_service import RedisService

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Extract the token from an "Authorization: Bearer <token>" header.

    Raises:
        Unauthenticated: If the header is missing or malformed
    """
    if not authorization:
        raise Unauthenticated("Authorization header missing")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise Unauthenticated("Invalid authorization header format")

    return parts[1]


class AuthGate:
    """
    Turns an Authorization header into an Identity.

    The user row is re-read on every request, so tokens issued to a user
    that no longer exists stop working immediately. Revoked (logged out)
    tokens are rejected through the Redis blacklist.
    """

    def __init__(self, db: AsyncSession, redis_service: Optional[RedisService] = None):
        """Initialize with database session and optional Redis service"""
        self.db = db
        self.redis_service = redis_service or RedisService()

    async def authenticate(self, authorization: Optional[str]) -> Identity:
        """
        Verify a bearer credential.

        Args:
            authorization: Raw Authorization header value

        Returns:
            Identity of the caller

        Raises:
            Unauthenticated: Missing, malformed, revoked, expired or unknown credential
        """
        token = extract_bearer_token(authorization)

        if await self.redis_service.is_token_revoked(token):
            raise Unauthenticated("Token has been revoked")

        payload = AuthService.validate_token(token, ACCESS_TOKEN)
        if not payload:
            raise Unauthenticated("Invalid or expired token")
        user_id = AuthService.subject_id(payload)

        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            logger.info(f"Token presented for unknown user {user_id}")
            raise Unauthenticated("User not found")

        return Identity(id=user.id, role=user.role, email=user.email)
