"""
Shared authorization and access template for a project's child records.

Tasks, budget items, change orders, progress draws and safety incidents are
all read and written the same way: resolve the parent project, check the
caller against its owner, then touch the child table. Each concrete gateway
only declares its model, schemas, ordering and write-time hooks.
"""

import logging
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Type, Union
from uuid import UUID
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.exceptions import NotFound
from scafflow.models.base import BaseModel as OrmModel
from scafflow.models.budget_item import BudgetItem
from scafflow.models.change_order import ChangeOrder
from scafflow.models.progress_draw import ProgressDraw
from scafflow.models.project import Project
from scafflow.models.safety_incident import SafetyIncident
from scafflow.models.task import Task
from scafflow.monitoring.metrics import metrics_collector
from scafflow.schemas.budget_item import BudgetItemCreate, BudgetItemResponse
from scafflow.schemas.change_order import ChangeOrderCreate, ChangeOrderResponse
from scafflow.schemas.progress_draw import ProgressDrawCreate, ProgressDrawResponse
from scafflow.schemas.safety_incident import SafetyIncidentCreate, SafetyIncidentResponse
from scafflow.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from scafflow.services.budget_ledger import BudgetLedger
from scafflow.services.ownership_policy import Identity
from scafflow.services.progress_rollup import ProgressRollupEngine
from scafflow.services.project_repository import ProjectRepository, require_writer
from scafflow.services.records import validate_payload, column_values, to_record

logger = logging.getLogger(__name__)

Payload = Union[Mapping[str, Any], BaseModel]


class ChildResourceGateway:
    """
    Base gateway for one child entity type.

    Subclasses set:
        model: ORM model with a project_id column
        create_schema: Schema validating create payloads
        read_schema: Typed record returned to callers
        resource: Plural name used in errors, logs and metrics
        order_column: Column name for newest-first listing
        creator_field: Column stamped with the caller's id on create
    """

    model: ClassVar[Type[OrmModel]]
    create_schema: ClassVar[Type[BaseModel]]
    read_schema: ClassVar[Type[BaseModel]]
    resource: ClassVar[str]
    order_column: ClassVar[str] = "created_at"
    creator_field: ClassVar[Optional[str]] = None

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db
        self.projects = ProjectRepository(db)

    def prepare(self, values: Dict[str, Any], identity: Identity) -> Dict[str, Any]:
        """Hook: adjust column values before insert"""
        return values

    async def after_write(self, row: OrmModel) -> None:
        """Hook: run after a row is committed"""
        return None

    async def list(self, identity: Optional[Identity], project_id: UUID) -> List[BaseModel]:
        """
        List a project's records, newest first.

        Raises:
            Unauthenticated, NotFound, Forbidden
        """
        await self.projects.authorize(identity, project_id, resource=self.resource)

        order = getattr(self.model, self.order_column)
        result = await self.db.execute(
            select(self.model)
            .join(Project, Project.id == self.model.project_id)
            .where(self.model.project_id == project_id)
            .order_by(order.desc())
        )
        return [to_record(self.read_schema, row) for row in result.scalars().all()]

    async def create(
        self, identity: Optional[Identity], project_id: UUID, payload: Payload
    ) -> BaseModel:
        """
        Create a record under a project the caller owns.

        Args:
            identity: Caller identity
            project_id: Parent project
            payload: Entity fields; any creator field is ignored

        Returns:
            The persisted record with generated id and timestamps

        Raises:
            Unauthenticated, Forbidden, InvalidInput, NotFound
        """
        identity = require_writer(identity, self.resource)
        data = validate_payload(self.create_schema, payload)
        await self.projects.authorize(identity, project_id, write=True, resource=self.resource)

        values = column_values(data, exclude={"project_id"}, exclude_none=True)
        if self.creator_field:
            values[self.creator_field] = identity.id
        values = self.prepare(values, identity)

        row = self.model(project_id=project_id, **values)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)

        metrics_collector.record_created(self.resource)
        logger.info(f"Created {self.resource} record {row.id} on project {project_id}")

        await self.after_write(row)
        return to_record(self.read_schema, row)


class TaskGateway(ChildResourceGateway):
    """Tasks; every write is followed by a project progress rollup"""

    model = Task
    create_schema = TaskCreate
    read_schema = TaskResponse
    resource = "tasks"

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.rollup = ProgressRollupEngine(db)

    async def after_write(self, row: Task) -> None:
        await self.rollup.recompute(row.project_id)

    async def update(
        self, identity: Optional[Identity], task_id: UUID, payload: Payload
    ) -> TaskResponse:
        """
        Partially update a task and roll its project's progress up.

        Only supplied, non-null fields change. The task stays in its project.

        Raises:
            Unauthenticated, Forbidden, InvalidInput, NotFound
        """
        identity = require_writer(identity, self.resource)
        data = validate_payload(TaskUpdate, payload)

        result = await self.db.execute(select(Task).where(Task.id == task_id))
        task = result.scalar_one_or_none()
        if task is None:
            raise NotFound("Task", task_id)

        await self.projects.authorize(identity, task.project_id, write=True, resource=self.resource)

        changes = column_values(data, exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(task, field, value)
        task.updated_at = datetime.utcnow()

        await self.db.commit()
        await self.db.refresh(task)
        logger.info(f"Updated task {task_id} fields {sorted(changes)}")

        await self.after_write(task)
        return to_record(TaskResponse, task)


class BudgetItemGateway(ChildResourceGateway):
    """Budget items; variance is derived by the ledger at insert"""

    model = BudgetItem
    create_schema = BudgetItemCreate
    read_schema = BudgetItemResponse
    resource = "budget items"

    def prepare(self, values: Dict[str, Any], identity: Identity) -> Dict[str, Any]:
        return BudgetLedger.prepare_budget_item(values)


class ChangeOrderGateway(ChildResourceGateway):
    # No transition guard on status: any enumerated value may be written
    model = ChangeOrder
    create_schema = ChangeOrderCreate
    read_schema = ChangeOrderResponse
    resource = "change orders"
    creator_field = "requested_by"


class ProgressDrawGateway(ChildResourceGateway):
    model = ProgressDraw
    create_schema = ProgressDrawCreate
    read_schema = ProgressDrawResponse
    resource = "progress draws"
    order_column = "requested_at"


class SafetyIncidentGateway(ChildResourceGateway):
    model = SafetyIncident
    create_schema = SafetyIncidentCreate
    read_schema = SafetyIncidentResponse
    resource = "safety incidents"
    order_column = "reported_at"
    creator_field = "reported_by"
