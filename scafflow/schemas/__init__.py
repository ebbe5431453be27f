"""API schemas package"""

from .project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectListResponse,
)
from .task import TaskCreate, TaskCreateRequest, TaskUpdate, TaskResponse
from .budget_item import BudgetItemCreate, BudgetItemCreateRequest, BudgetItemResponse
from .change_order import ChangeOrderCreate, ChangeOrderCreateRequest, ChangeOrderResponse
from .progress_draw import ProgressDrawCreate, ProgressDrawCreateRequest, ProgressDrawResponse
from .safety_incident import (
    SafetyIncidentCreate,
    SafetyIncidentCreateRequest,
    SafetyIncidentResponse,
)
from .metrics import ProjectMetrics, ProjectMetricsResponse
from .auth import (
    LoginRequest,
    SignupRequest,
    TokenResponse,
    RefreshTokenResponse,
    UserInfo,
    UserResponse,
    UserSummary,
)

__all__ = [
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectListResponse",
    "TaskCreate",
    "TaskCreateRequest",
    "TaskUpdate",
    "TaskResponse",
    "BudgetItemCreate",
    "BudgetItemCreateRequest",
    "BudgetItemResponse",
    "ChangeOrderCreate",
    "ChangeOrderCreateRequest",
    "ChangeOrderResponse",
    "ProgressDrawCreate",
    "ProgressDrawCreateRequest",
    "ProgressDrawResponse",
    "SafetyIncidentCreate",
    "SafetyIncidentCreateRequest",
    "SafetyIncidentResponse",
    "ProjectMetrics",
    "ProjectMetricsResponse",
    "LoginRequest",
    "SignupRequest",
    "TokenResponse",
    "RefreshTokenResponse",
    "UserInfo",
    "UserResponse",
    "UserSummary",
]
