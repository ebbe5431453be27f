"""Budget item endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.database import get_db
from scafflow.api.dependencies import get_identity, get_writer_identity
from scafflow.api.errors import PROBLEM_RESPONSES
from scafflow.schemas.budget_item import BudgetItemCreateRequest, BudgetItemResponse
from scafflow.services.child_resources import BudgetItemGateway
from scafflow.services.ownership_policy import Identity

router = APIRouter(prefix="/api/v1/budget-items", tags=["Budget"], responses=PROBLEM_RESPONSES)


@router.get("", response_model=List[BudgetItemResponse], status_code=status.HTTP_200_OK)
async def list_budget_items(
    project_id: UUID = Query(..., description="Project whose budget items to list"),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """List a project's budget items, newest first"""
    return await BudgetItemGateway(db).list(identity, project_id)


@router.post("", response_model=BudgetItemResponse, status_code=status.HTTP_201_CREATED)
async def create_budget_item(
    item_data: BudgetItemCreateRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_writer_identity)
):
    """
    Create a budget line item

    - **category**: Cost category (required)
    - **budget_amount** / **spent_amount**: default 0; variance is derived
    """
    return await BudgetItemGateway(db).create(identity, item_data.project_id, item_data)
