"""Task endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.database import get_db
from scafflow.api.dependencies import get_identity, get_writer_identity
from scafflow.api.errors import PROBLEM_RESPONSES
from scafflow.schemas.task import TaskCreateRequest, TaskUpdate, TaskResponse
from scafflow.services.child_resources import TaskGateway
from scafflow.services.ownership_policy import Identity

router = APIRouter(prefix="/api/v1/tasks", tags=["Tasks"], responses=PROBLEM_RESPONSES)


@router.get("", response_model=List[TaskResponse], status_code=status.HTTP_200_OK)
async def list_tasks(
    project_id: UUID = Query(..., description="Project whose tasks to list"),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """List a project's tasks, newest first"""
    return await TaskGateway(db).list(identity, project_id)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreateRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_writer_identity)
):
    """
    Create a task and roll the project's progress up

    - **project_id**: Owning project (required)
    - **title**: Task title (required)
    - **progress_percentage**: 0-100, default 0
    """
    return await TaskGateway(db).create(identity, task_data.project_id, task_data)


@router.patch("/{task_id}", response_model=TaskResponse, status_code=status.HTTP_200_OK)
async def update_task(
    task_id: UUID,
    task_update: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_writer_identity)
):
    """
    Partially update a task

    Only supplied, non-null fields change. The project's progress is
    recomputed before the response is returned.
    """
    return await TaskGateway(db).update(identity, task_id, task_update)
