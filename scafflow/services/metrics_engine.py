"""Portfolio KPIs derived from a project's child records"""

from typing import Any, Iterable, Optional, Sequence

from scafflow.models.change_order import ChangeOrderStatus
from scafflow.schemas.metrics import ProjectMetrics

QUALITY_FLOOR = 60
QUALITY_PENALTY_PER_OPEN_CHANGE = 5


def average_progress(percentages: Iterable[Optional[int]]) -> int:
    """
    Mean of task percentages rounded to the nearest integer, halves rounding up.

    Missing percentages count as 0. An empty input yields 0.
    """
    values = [int(p or 0) for p in percentages]
    if not values:
        return 0
    total, count = sum(values), len(values)
    # Integer half-up rounding; percentages are never negative
    return (2 * total + count) // (2 * count)


def _ratio(numerator: float, denominator: float) -> Optional[float]:
    if denominator == 0:
        return None
    return numerator / denominator


def _sum(records: Iterable[Any], field: str) -> float:
    return float(sum(float(getattr(r, field, 0) or 0) for r in records))


class MetricsEngine:
    """
    Stateless KPI calculator. Never touches storage: callers load the
    records (through the authorization-scoped gateways) and pass them in.
    """

    @staticmethod
    def compute(
        tasks: Sequence[Any],
        budget_items: Sequence[Any],
        change_orders: Sequence[Any],
        progress_draws: Sequence[Any],
        safety_incidents: Sequence[Any] = (),
    ) -> ProjectMetrics:
        """
        Derive every KPI for one project snapshot.

        Args:
            tasks: Records with progress_percentage
            budget_items: Records with budget_amount, spent_amount, variance
            change_orders: Records with amount, status
            progress_draws: Records with amount
            safety_incidents: Records with status

        Returns:
            ProjectMetrics
        """
        progress = average_progress(t.progress_percentage for t in tasks)

        budget_total = _sum(budget_items, "budget_amount")
        budget_spent = _sum(budget_items, "spent_amount")
        variance_sum = _sum(budget_items, "variance")

        change_total = _sum(change_orders, "amount")
        change_count = len(change_orders)
        approved = sum(
            1 for c in change_orders if c.status == ChangeOrderStatus.APPROVED.value
        )

        quality = max(
            QUALITY_FLOOR,
            100 - (change_count - approved) * QUALITY_PENALTY_PER_OPEN_CHANGE,
        )

        return ProjectMetrics(
            average_task_progress=progress,
            budget_total=budget_total,
            budget_spent=budget_spent,
            budget_variance_sum=variance_sum,
            change_order_total=change_total,
            change_order_count=change_count,
            approved_change_orders=approved,
            cost_performance_index=_ratio(budget_total, budget_spent + change_total),
            schedule_performance_index=progress / 100,
            change_order_approval_rate=_ratio(approved, change_count),
            progress_draw_total=_sum(progress_draws, "amount"),
            quality_score=quality,
            open_safety_incidents=sum(1 for s in safety_incidents if s.status == "open"),
        )
