"""Task schemas"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from uuid import UUID

from scafflow.models.task import TaskStatus


class TaskCreate(BaseModel):
    """Fields accepted when creating a task"""
    title: str = Field(..., min_length=1, max_length=255, description="Task title")
    description: Optional[str] = None
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    progress_percentage: int = Field(default=0, ge=0, le=100)
    assigned_to: Optional[UUID] = Field(None, description="User the task is assigned to")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    priority: str = Field(default="medium", max_length=50)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Task title cannot be empty")
        return v.strip()


class TaskCreateRequest(TaskCreate):
    """Task creation request body"""
    project_id: UUID = Field(..., description="Owning project")


class TaskUpdate(BaseModel):
    """Partial task update; project_id is not updatable"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    progress_percentage: Optional[int] = Field(None, ge=0, le=100)
    assigned_to: Optional[UUID] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    priority: Optional[str] = Field(None, max_length=50)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Task title cannot be empty")
        return v.strip() if v is not None else v


class TaskResponse(BaseModel):
    """Task read model"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    progress_percentage: int = Field(..., ge=0, le=100)
    assigned_to: Optional[UUID] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    priority: str
    created_at: datetime
    updated_at: datetime
