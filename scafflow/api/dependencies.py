"""API dependencies for authentication and authorization"""

from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.database import get_db
from scafflow.services.auth_gate import AuthGate
from scafflow.services.ownership_policy import Identity
from scafflow.services.project_repository import require_writer


async def get_identity(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Identity:
    """
    Resolve the caller's Identity from the Authorization header.

    Args:
        authorization: Authorization header with Bearer token
        db: Database session

    Returns:
        Identity of the authenticated user

    Raises:
        Unauthenticated: If the token is missing, invalid, revoked or for an unknown user
    """
    return await AuthGate(db).authenticate(authorization)


async def get_writer_identity(
    identity: Identity = Depends(get_identity),
) -> Identity:
    """
    Resolve an identity that is allowed to write at all.

    Admins are rejected here, before the request body is validated, so an
    admin write is reported as 403 even when its payload is malformed.

    Raises:
        Unauthenticated, Forbidden
    """
    return require_writer(identity, "write operations")
