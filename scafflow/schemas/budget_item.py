"""Budget item schemas"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from uuid import UUID

from scafflow.schemas.common import Money


class BudgetItemCreate(BaseModel):
    """Fields accepted when creating a budget item; variance is always derived"""
    category: str = Field(..., min_length=1, max_length=255, description="Cost category")
    description: Optional[str] = None
    budget_amount: Optional[Money] = Field(None, description="Budgeted amount, 0 when omitted")
    spent_amount: Optional[Money] = Field(None, description="Amount spent so far, 0 when omitted")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Budget category cannot be empty")
        return v.strip()


class BudgetItemCreateRequest(BudgetItemCreate):
    """Budget item creation request body"""
    project_id: UUID


class BudgetItemResponse(BaseModel):
    """Budget item read model"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    category: str
    description: Optional[str] = None
    budget_amount: float
    spent_amount: float
    variance: float
    created_at: datetime
    updated_at: datetime
