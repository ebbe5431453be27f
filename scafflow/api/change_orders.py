"""Change order endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.database import get_db
from scafflow.api.dependencies import get_identity, get_writer_identity
from scafflow.api.errors import PROBLEM_RESPONSES
from scafflow.schemas.change_order import ChangeOrderCreateRequest, ChangeOrderResponse
from scafflow.services.child_resources import ChangeOrderGateway
from scafflow.services.ownership_policy import Identity

router = APIRouter(
    prefix="/api/v1/change-orders", tags=["Change Orders"], responses=PROBLEM_RESPONSES
)


@router.get("", response_model=List[ChangeOrderResponse], status_code=status.HTTP_200_OK)
async def list_change_orders(
    project_id: UUID = Query(..., description="Project whose change orders to list"),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """List a project's change orders, newest first"""
    return await ChangeOrderGateway(db).list(identity, project_id)


@router.post("", response_model=ChangeOrderResponse, status_code=status.HTTP_201_CREATED)
async def create_change_order(
    order_data: ChangeOrderCreateRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_writer_identity)
):
    """
    Request a change order

    - **amount**: Nonzero amount (required)

    The requester is always the caller.
    """
    return await ChangeOrderGateway(db).create(identity, order_data.project_id, order_data)
