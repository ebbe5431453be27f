"""Project progress rollup from task percentages"""

import logging
import time
from datetime import datetime
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.exceptions import IntegrityViolation
from scafflow.models.project import Project
from scafflow.models.task import Task
from scafflow.monitoring.metrics import metrics_collector
from scafflow.services.metrics_engine import average_progress

logger = logging.getLogger(__name__)


class ProgressRollupEngine:
    """
    Keeps Project.progress_percentage equal to the rounded mean of its tasks.

    The value is recomputed from the full task set on every call, so running
    it redundantly is harmless. It commits before returning: a read issued
    after the triggering task write observes the new percentage.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def recompute(self, project_id: UUID) -> int:
        """
        Recompute and store a project's progress percentage.

        Args:
            project_id: Project to roll up

        Returns:
            The stored percentage

        Raises:
            IntegrityViolation: If the project no longer exists
        """
        started = time.perf_counter()

        result = await self.db.execute(select(Project).where(Project.id == project_id))
        project = result.scalar_one_or_none()
        if project is None:
            metrics_collector.record_rollup("missing_project", time.perf_counter() - started)
            logger.error(f"Progress rollup could not find project {project_id}")
            raise IntegrityViolation(f"Project {project_id} missing during progress rollup")

        task_result = await self.db.execute(
            select(Task.progress_percentage).where(Task.project_id == project_id)
        )
        percentages = task_result.scalars().all()

        project.progress_percentage = average_progress(percentages)
        project.updated_at = datetime.utcnow()

        await self.db.commit()

        metrics_collector.record_rollup("ok", time.perf_counter() - started)
        logger.info(
            f"Project {project_id} progress rolled up to {project.progress_percentage}% "
            f"from {len(percentages)} tasks"
        )
        return project.progress_percentage
