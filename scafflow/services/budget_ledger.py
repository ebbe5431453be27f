"""Budget ledger: keeps variance = budget - spent on budget items and projects"""

import logging
from typing import Any, Dict, Optional

from scafflow.models.project import Project

logger = logging.getLogger(__name__)

BUDGET_FIELDS = ("budget_total", "budget_spent")


class BudgetLedger:
    """
    Write-time variance maintenance.

    Budget items are immutable once created, so their variance is computed
    exactly once. Projects take partial updates: a change to one budget side
    is merged with the stored value of the other side before the variance is
    recomputed.
    """

    @staticmethod
    def variance(budget: Optional[float], spent: Optional[float]) -> float:
        """budget - spent, treating missing amounts as 0"""
        return float(budget or 0) - float(spent or 0)

    @staticmethod
    def prepare_budget_item(values: Dict[str, Any]) -> Dict[str, Any]:
        """
        Fill in defaults and the derived variance for a new budget item.

        Args:
            values: Validated budget item fields (variance is ignored if present)

        Returns:
            Column values ready for insert
        """
        prepared = dict(values)
        prepared["budget_amount"] = float(prepared.get("budget_amount") or 0)
        prepared["spent_amount"] = float(prepared.get("spent_amount") or 0)
        prepared["variance"] = BudgetLedger.variance(
            prepared["budget_amount"], prepared["spent_amount"]
        )
        return prepared

    @staticmethod
    def apply_project_changes(project: Project, changes: Dict[str, Any]) -> bool:
        """
        Merge budget changes into a project and recompute its variance.

        Only keys present in ``changes`` are considered supplied; the other
        side keeps its stored value.

        Args:
            project: Project row being updated
            changes: Supplied update fields

        Returns:
            True if the variance was recomputed
        """
        if not any(field in changes for field in BUDGET_FIELDS):
            return False

        total = changes.get("budget_total", project.budget_total)
        spent = changes.get("budget_spent", project.budget_spent)

        project.budget_total = total
        project.budget_spent = float(spent or 0)
        project.budget_variance = BudgetLedger.variance(total, spent)

        logger.debug(
            f"Project {project.id} budget variance recomputed: "
            f"{project.budget_total} - {project.budget_spent} = {project.budget_variance}"
        )
        return True
