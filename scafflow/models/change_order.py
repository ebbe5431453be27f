"""Change order model"""

import enum
from sqlalchemy import Column, String, Text, Numeric, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from scafflow.models.base import BaseModel


class ChangeOrderStatus(str, enum.Enum):
    """Change order approval status"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ChangeOrder(BaseModel):
    """Change order requested against a project's scope or cost"""

    __tablename__ = "change_orders"

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(15, 2, asdecimal=False), nullable=False)
    status = Column(String(50), default=ChangeOrderStatus.PENDING.value, nullable=False)
    requested_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="change_orders")

    def __repr__(self):
        return f"<ChangeOrder(id={self.id}, amount={self.amount}, status={self.status})>"
