"""Safety incident model"""

import enum
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from scafflow.models.base import BaseModel


class IncidentSeverity(str, enum.Enum):
    """Safety incident severity"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SafetyIncident(BaseModel):
    """Safety incident reported on a project site"""

    __tablename__ = "safety_incidents"

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    incident_type = Column(String(50), default="general", nullable=False)
    severity = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    reported_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    reported_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    status = Column(String(50), default="open", nullable=False)

    # Relationships
    project = relationship("Project", back_populates="safety_incidents")

    def __repr__(self):
        return f"<SafetyIncident(id={self.id}, severity={self.severity}, status={self.status})>"
