"""Progress draw schemas"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from uuid import UUID

from scafflow.models.progress_draw import ProgressDrawStatus
from scafflow.schemas.common import Money


class ProgressDrawCreate(BaseModel):
    """Fields accepted when requesting a progress draw"""
    draw_number: Optional[str] = Field(None, max_length=50)
    amount: Money = Field(..., description="Requested draw amount")
    status: ProgressDrawStatus = Field(default=ProgressDrawStatus.REQUESTED)
    requested_at: Optional[datetime] = Field(None, description="Defaults to now")
    paid_at: Optional[datetime] = None


class ProgressDrawCreateRequest(ProgressDrawCreate):
    """Progress draw creation request body"""
    project_id: UUID


class ProgressDrawResponse(BaseModel):
    """Progress draw read model"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    draw_number: Optional[str] = None
    amount: float
    status: ProgressDrawStatus
    requested_at: datetime
    paid_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
