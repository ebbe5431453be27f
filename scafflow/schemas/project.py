"""Project schemas"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from uuid import UUID

from scafflow.schemas.common import Money


def _non_blank(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError("Project name cannot be empty")
    return v.strip() if v is not None else v


class ProjectCreate(BaseModel):
    """Project creation schema; the owner is always the creating identity"""
    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    description: Optional[str] = Field(None, description="Project description")
    location: Optional[str] = Field(None, max_length=255, description="Site location")
    status: str = Field(default="active", max_length=50, description="Project status")
    budget_total: Optional[Money] = Field(None, description="Total approved budget")
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _non_blank(v)


class ProjectUpdate(BaseModel):
    """Project update schema - all fields optional, omitted or null fields keep their stored value"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    status: Optional[str] = Field(None, max_length=50)
    budget_total: Optional[Money] = None
    budget_spent: Optional[Money] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return _non_blank(v)


class ProjectResponse(BaseModel):
    """Project read model"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    status: str
    budget_total: Optional[float] = None
    budget_spent: float = 0
    budget_variance: float = 0
    progress_percentage: int = Field(0, ge=0, le=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProjectListResponse(BaseModel):
    """List of projects response"""
    projects: list[ProjectResponse]
    total: int = Field(..., description="Total number of projects")
