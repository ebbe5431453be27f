"""Task model"""

import enum
from sqlalchemy import Column, String, Text, Integer, Date, ForeignKey, Uuid, CheckConstraint
from sqlalchemy.orm import relationship
from scafflow.models.base import BaseModel


class TaskStatus(str, enum.Enum):
    """Task lifecycle status"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Task(BaseModel):
    """
    Task model representing a unit of work on a project.
    Tasks are cascade-owned by their project and never move between projects.
    """

    __tablename__ = "tasks"

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(50), default=TaskStatus.PENDING.value, nullable=False)
    assigned_to = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    priority = Column(String(50), default="medium", nullable=False)
    progress_percentage = Column(Integer, default=0, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="tasks")

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "progress_percentage >= 0 AND progress_percentage <= 100",
            name="check_task_progress_range",
        ),
    )

    def __repr__(self):
        return f"<Task(id={self.id}, title={self.title}, status={self.status})>"
