"""Safety incident schemas"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from uuid import UUID

from scafflow.models.safety_incident import IncidentSeverity


class SafetyIncidentCreate(BaseModel):
    """Fields accepted when reporting an incident; reported_by comes from the caller"""
    incident_type: str = Field(default="general", max_length=50)
    severity: IncidentSeverity
    description: str = Field(..., min_length=1)
    status: str = Field(default="open", max_length=50)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Incident description cannot be empty")
        return v.strip()


class SafetyIncidentCreateRequest(SafetyIncidentCreate):
    """Safety incident creation request body"""
    project_id: UUID


class SafetyIncidentResponse(BaseModel):
    """Safety incident read model"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    incident_type: str
    severity: IncidentSeverity
    description: str
    reported_by: UUID
    reported_at: datetime
    status: str
    created_at: datetime
    updated_at: datetime
