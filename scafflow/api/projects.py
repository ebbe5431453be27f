"""Project management endpoints"""

from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.database import get_db
from scafflow.api.dependencies import get_identity, get_writer_identity
from scafflow.api.errors import PROBLEM_RESPONSES
from scafflow.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectListResponse
)
from scafflow.schemas.metrics import ProjectMetricsResponse
from scafflow.services.child_resources import (
    TaskGateway,
    BudgetItemGateway,
    ChangeOrderGateway,
    ProgressDrawGateway,
    SafetyIncidentGateway,
)
from scafflow.services.metrics_engine import MetricsEngine
from scafflow.services.ownership_policy import Identity
from scafflow.services.project_repository import ProjectRepository

router = APIRouter(prefix="/api/v1/projects", tags=["Projects"], responses=PROBLEM_RESPONSES)


@router.get("", response_model=ProjectListResponse, status_code=status.HTTP_200_OK)
async def get_projects(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """
    Get all projects visible to the caller, newest first

    Owners see their own projects; admins see every project.
    """
    repository = ProjectRepository(db)
    projects = await repository.list_visible(identity)
    total = await repository.count_visible(identity)
    return ProjectListResponse(projects=projects, total=total)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_writer_identity)
):
    """
    Create a project owned by the caller

    - **name**: Project name (required)
    - **budget_total**: Approved budget; variance starts equal to it
    """
    return await ProjectRepository(db).create(identity, project_data)


@router.get("/{project_id}", response_model=ProjectResponse, status_code=status.HTTP_200_OK)
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """
    Get a single project

    Returns 404 if the project does not exist and 403 if the caller may not read it.
    """
    return await ProjectRepository(db).get_visible(identity, project_id)


@router.patch("/{project_id}", response_model=ProjectResponse, status_code=status.HTTP_200_OK)
async def update_project(
    project_id: UUID,
    project_update: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_writer_identity)
):
    """
    Partially update a project

    Omitted or null fields keep their stored value. Changing either budget
    side recomputes the budget variance against the stored other side.
    """
    return await ProjectRepository(db).update(identity, project_id, project_update)


@router.get(
    "/{project_id}/metrics",
    response_model=ProjectMetricsResponse,
    status_code=status.HTTP_200_OK
)
async def get_project_metrics(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """
    Portfolio KPIs for one project, computed on demand from its child records

    Undefined ratios (no change orders, zero cost denominator) are null.
    """
    tasks = await TaskGateway(db).list(identity, project_id)
    budget_items = await BudgetItemGateway(db).list(identity, project_id)
    change_orders = await ChangeOrderGateway(db).list(identity, project_id)
    progress_draws = await ProgressDrawGateway(db).list(identity, project_id)
    safety_incidents = await SafetyIncidentGateway(db).list(identity, project_id)

    metrics = MetricsEngine.compute(
        tasks, budget_items, change_orders, progress_draws, safety_incidents
    )
    return ProjectMetricsResponse(project_id=project_id, **metrics.model_dump())
