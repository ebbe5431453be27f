"""Progress draw endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.database import get_db
from scafflow.api.dependencies import get_identity, get_writer_identity
from scafflow.api.errors import PROBLEM_RESPONSES
from scafflow.schemas.progress_draw import ProgressDrawCreateRequest, ProgressDrawResponse
from scafflow.services.child_resources import ProgressDrawGateway
from scafflow.services.ownership_policy import Identity

router = APIRouter(
    prefix="/api/v1/progress-draws", tags=["Progress Draws"], responses=PROBLEM_RESPONSES
)


@router.get("", response_model=List[ProgressDrawResponse], status_code=status.HTTP_200_OK)
async def list_progress_draws(
    project_id: UUID = Query(..., description="Project whose draws to list"),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """List a project's progress draws, most recently requested first"""
    return await ProgressDrawGateway(db).list(identity, project_id)


@router.post("", response_model=ProgressDrawResponse, status_code=status.HTTP_201_CREATED)
async def create_progress_draw(
    draw_data: ProgressDrawCreateRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_writer_identity)
):
    """Request a progress draw against a project"""
    return await ProgressDrawGateway(db).create(identity, draw_data.project_id, draw_data)
