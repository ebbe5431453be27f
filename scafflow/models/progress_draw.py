"""Progress draw model"""

import enum
from datetime import datetime
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from scafflow.models.base import BaseModel


class ProgressDrawStatus(str, enum.Enum):
    """Progress draw payment status"""
    REQUESTED = "requested"
    APPROVED = "approved"
    PAID = "paid"


class ProgressDraw(BaseModel):
    """Payment draw requested against a project's completed work"""

    __tablename__ = "progress_draws"

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    draw_number = Column(String(50), nullable=True)
    amount = Column(Numeric(15, 2, asdecimal=False), nullable=False)
    status = Column(String(50), default=ProgressDrawStatus.REQUESTED.value, nullable=False)
    requested_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    paid_at = Column(DateTime, nullable=True)

    # Relationships
    project = relationship("Project", back_populates="progress_draws")

    def __repr__(self):
        return f"<ProgressDraw(id={self.id}, draw_number={self.draw_number}, status={self.status})>"
