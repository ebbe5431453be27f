"""Database models package"""

from scafflow.models.base import BaseModel
from scafflow.models.user import User, UserRole, OWNER_ROLES
from scafflow.models.project import Project
from scafflow.models.task import Task, TaskStatus
from scafflow.models.budget_item import BudgetItem
from scafflow.models.change_order import ChangeOrder, ChangeOrderStatus
from scafflow.models.progress_draw import ProgressDraw, ProgressDrawStatus
from scafflow.models.safety_incident import SafetyIncident, IncidentSeverity

# Export all models
__all__ = [
    "BaseModel",
    "User",
    "UserRole",
    "OWNER_ROLES",
    "Project",
    "Task",
    "TaskStatus",
    "BudgetItem",
    "ChangeOrder",
    "ChangeOrderStatus",
    "ProgressDraw",
    "ProgressDrawStatus",
    "SafetyIncident",
    "IncidentSeverity",
]
