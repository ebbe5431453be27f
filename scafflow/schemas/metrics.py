"""Project KPI schemas"""

from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class ProjectMetrics(BaseModel):
    """
    KPIs derived from one project's child records.
    Ratios with a zero denominator are None ("undefined"), never NaN or Infinity.
    """
    average_task_progress: int = Field(..., ge=0, le=100)
    budget_total: float
    budget_spent: float
    budget_variance_sum: float
    change_order_total: float
    change_order_count: int
    approved_change_orders: int
    cost_performance_index: Optional[float] = None
    schedule_performance_index: float
    change_order_approval_rate: Optional[float] = None
    progress_draw_total: float
    quality_score: int
    open_safety_incidents: int = 0


class ProjectMetricsResponse(ProjectMetrics):
    """KPI response for a single project"""
    project_id: UUID
