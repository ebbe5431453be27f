"""Project model"""

from sqlalchemy import Column, String, Text, Integer, Numeric, Date, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from scafflow.models.base import BaseModel


class Project(BaseModel):
    """
    Project model representing a construction project owned by one user.

    budget_variance and progress_percentage are derived: the first by the
    budget ledger on every budget change, the second by the progress rollup
    after every task write.
    """

    __tablename__ = "projects"

    owner_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    status = Column(
        String(50), default="active", nullable=False
    )  # free-form: active, on_hold, completed, ...
    budget_total = Column(Numeric(15, 2, asdecimal=False), nullable=True)
    budget_spent = Column(Numeric(15, 2, asdecimal=False), default=0, nullable=False)
    budget_variance = Column(Numeric(15, 2, asdecimal=False), default=0, nullable=False)
    progress_percentage = Column(Integer, default=0, nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    # Relationships
    owner = relationship("User", back_populates="projects")
    tasks = relationship("Task", back_populates="project", cascade="all, delete-orphan")
    budget_items = relationship(
        "BudgetItem", back_populates="project", cascade="all, delete-orphan"
    )
    change_orders = relationship(
        "ChangeOrder", back_populates="project", cascade="all, delete-orphan"
    )
    progress_draws = relationship(
        "ProgressDraw", back_populates="project", cascade="all, delete-orphan"
    )
    safety_incidents = relationship(
        "SafetyIncident", back_populates="project", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name}, status={self.status})>"
