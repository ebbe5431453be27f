"""Budget item model"""

from sqlalchemy import Column, String, Text, Numeric, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from scafflow.models.base import BaseModel


class BudgetItem(BaseModel):
    """
    Budget line item for a project.
    variance is always budget_amount - spent_amount, written by the budget ledger.
    """

    __tablename__ = "budget_items"

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    budget_amount = Column(Numeric(15, 2, asdecimal=False), default=0, nullable=False)
    spent_amount = Column(Numeric(15, 2, asdecimal=False), default=0, nullable=False)
    variance = Column(Numeric(15, 2, asdecimal=False), default=0, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="budget_items")

    def __repr__(self):
        return f"<BudgetItem(id={self.id}, category={self.category}, variance={self.variance})>"
