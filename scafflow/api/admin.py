"""Admin endpoints"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.database import get_db
from scafflow.api.dependencies import get_identity
from scafflow.api.errors import PROBLEM_RESPONSES
from scafflow.schemas.auth import UserSummary
from scafflow.services.ownership_policy import Identity
from scafflow.services.user_service import UserService

router = APIRouter(prefix="/api/v1/admin", tags=["Admin"], responses=PROBLEM_RESPONSES)


@router.get("/users", response_model=List[UserSummary], status_code=status.HTTP_200_OK)
async def list_users(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """
    List every user with the number of projects they own (admin only)
    """
    return await UserService(db).list_with_project_counts(identity)
