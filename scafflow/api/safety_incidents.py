"""Safety incident endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.database import get_db
from scafflow.api.dependencies import get_identity, get_writer_identity
from scafflow.api.errors import PROBLEM_RESPONSES
from scafflow.schemas.safety_incident import (
    SafetyIncidentCreateRequest,
    SafetyIncidentResponse
)
from scafflow.services.child_resources import SafetyIncidentGateway
from scafflow.services.ownership_policy import Identity

router = APIRouter(
    prefix="/api/v1/safety-incidents", tags=["Safety"], responses=PROBLEM_RESPONSES
)


@router.get("", response_model=List[SafetyIncidentResponse], status_code=status.HTTP_200_OK)
async def list_safety_incidents(
    project_id: UUID = Query(..., description="Project whose incidents to list"),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """List a project's safety incidents, most recently reported first"""
    return await SafetyIncidentGateway(db).list(identity, project_id)


@router.post("", response_model=SafetyIncidentResponse, status_code=status.HTTP_201_CREATED)
async def report_safety_incident(
    incident_data: SafetyIncidentCreateRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_writer_identity)
):
    """
    Report a safety incident

    - **severity**: low, medium or high (required)
    - **description**: What happened (required)

    The reporter is always the caller.
    """
    return await SafetyIncidentGateway(db).create(
        identity, incident_data.project_id, incident_data
    )
