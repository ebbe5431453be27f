"""Change order schemas"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from uuid import UUID

from scafflow.models.change_order import ChangeOrderStatus
from scafflow.schemas.common import Money


class ChangeOrderCreate(BaseModel):
    """Fields accepted when creating a change order; requested_by comes from the caller"""
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    amount: Money = Field(..., description="Cost impact of the change")
    status: ChangeOrderStatus = Field(default=ChangeOrderStatus.PENDING)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: float) -> float:
        if v == 0:
            raise ValueError("Change order amount must be nonzero")
        return v


class ChangeOrderCreateRequest(ChangeOrderCreate):
    """Change order creation request body"""
    project_id: UUID


class ChangeOrderResponse(BaseModel):
    """Change order read model"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    title: Optional[str] = None
    description: Optional[str] = None
    amount: float
    status: ChangeOrderStatus
    requested_by: UUID
    created_at: datetime
    updated_at: datetime
