"""Services package"""

from .ownership_policy import Identity, AccessDecision, decide
from .budget_ledger import BudgetLedger
from .metrics_engine import MetricsEngine
from .progress_rollup import ProgressRollupEngine
from .project_repository import ProjectRepository
from .child_resources import (
    TaskGateway,
    BudgetItemGateway,
    ChangeOrderGateway,
    ProgressDrawGateway,
    SafetyIncidentGateway,
)
from .auth_gate import AuthGate
from .user_service import UserService

__all__ = [
    "Identity",
    "AccessDecision",
    "decide",
    "BudgetLedger",
    "MetricsEngine",
    "ProgressRollupEngine",
    "ProjectRepository",
    "TaskGateway",
    "BudgetItemGateway",
    "ChangeOrderGateway",
    "ProgressDrawGateway",
    "SafetyIncidentGateway",
    "AuthGate",
    "UserService",
]
