"""Authorization-scoped project data access"""

import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional, Union
from uuid import UUID
from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.exceptions import Unauthenticated, Forbidden, NotFound
from scafflow.models.project import Project
from scafflow.models.user import User
from scafflow.monitoring.metrics import metrics_collector
from scafflow.schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse
from scafflow.services.budget_ledger import BudgetLedger
from scafflow.services.ownership_policy import Identity, decide, can_read, can_write
from scafflow.services.records import validate_payload, to_record

logger = logging.getLogger(__name__)

Payload = Union[Mapping[str, Any], BaseModel]


def require_identity(identity: Optional[Identity]) -> Identity:
    """Raise Unauthenticated when no identity was established"""
    if identity is None:
        raise Unauthenticated()
    return identity


def require_writer(identity: Optional[Identity], resource: str) -> Identity:
    """
    Reject callers that can never write, before any storage access.

    Admins are read-only as a role, whatever project is targeted.
    """
    identity = require_identity(identity)
    if identity.is_admin:
        metrics_collector.record_authorization(resource, "write", "denied_admin")
        logger.info(f"Admin {identity.id} denied write on {resource}")
        raise Forbidden(f"Admins are read-only for {resource}")
    return identity


def _warn_on_date_order(name: str, start_date, end_date) -> None:
    if start_date and end_date and start_date > end_date:
        logger.warning(
            f"Project '{name}' has start_date {start_date} after end_date {end_date}"
        )


class ProjectRepository:
    """
    Project reads and writes filtered by the ownership policy.

    Owners see and mutate only their own projects; admins see every project
    and mutate none. Rows the caller may not see are never returned.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db
        self.ledger = BudgetLedger()

    def _visible_query(self, identity: Identity):
        query = self._with_owner()
        if not identity.is_admin:
            query = query.where(Project.owner_id == identity.id)
        return query

    @staticmethod
    def _with_owner():
        return (
            select(Project, User.name, User.email)
            .join(User, User.id == Project.owner_id)
        )

    @staticmethod
    def _record(row) -> ProjectResponse:
        project, owner_name, owner_email = row
        return to_record(
            ProjectResponse, project, owner_name=owner_name, owner_email=owner_email
        )

    @staticmethod
    def _check_access(identity: Identity, project: Project, write: bool, resource: str) -> None:
        action = "write" if write else "read"
        decision = decide(identity, project.owner_id)
        allowed = can_write(decision) if write else can_read(decision)
        if not allowed:
            metrics_collector.record_authorization(resource, action, "denied")
            logger.info(
                f"User {identity.id} denied {action} on {resource} of project {project.id}"
            )
            raise Forbidden(f"You do not have permission to {action} {resource} of this project")

        metrics_collector.record_authorization(resource, action, "allowed")

    async def authorize(
        self,
        identity: Optional[Identity],
        project_id: UUID,
        write: bool = False,
        resource: str = "projects",
    ) -> Project:
        """
        Resolve a project and check the caller's access to it.

        Write callers reject admins with require_writer before validating
        their payload; here an admin write is simply denied by the policy.

        Args:
            identity: Caller identity
            project_id: Project to resolve
            write: Whether write access is required
            resource: Resource name used in errors and metrics

        Returns:
            The Project row

        Raises:
            Unauthenticated: No identity
            Forbidden: Caller may not access the project this way
            NotFound: Project does not exist
        """
        identity = require_identity(identity)

        result = await self.db.execute(select(Project).where(Project.id == project_id))
        project = result.scalar_one_or_none()
        if project is None:
            raise NotFound("Project", project_id)

        self._check_access(identity, project, write, resource)
        return project

    async def list_visible(self, identity: Optional[Identity]) -> List[ProjectResponse]:
        """All projects the caller may see, newest first"""
        identity = require_identity(identity)
        result = await self.db.execute(
            self._visible_query(identity).order_by(Project.created_at.desc())
        )
        return [self._record(row) for row in result.all()]

    async def count_visible(self, identity: Optional[Identity]) -> int:
        """Number of projects the caller may see"""
        identity = require_identity(identity)
        query = select(func.count(Project.id)).join(User, User.id == Project.owner_id)
        if not identity.is_admin:
            query = query.where(Project.owner_id == identity.id)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def get_visible(self, identity: Optional[Identity], project_id: UUID) -> ProjectResponse:
        """
        Fetch one project with its owner's name and email.

        Raises:
            Unauthenticated, NotFound, Forbidden
        """
        identity = require_identity(identity)
        result = await self.db.execute(self._with_owner().where(Project.id == project_id))
        row = result.one_or_none()
        if row is None:
            raise NotFound("Project", project_id)

        self._check_access(identity, row[0], write=False, resource="projects")
        return self._record(row)

    async def create(self, identity: Optional[Identity], payload: Payload) -> ProjectResponse:
        """
        Create a project owned by the caller.

        Args:
            identity: Caller identity (admins are rejected)
            payload: ProjectCreate fields

        Returns:
            The persisted project
        """
        identity = require_writer(identity, "projects")
        data = validate_payload(ProjectCreate, payload)
        _warn_on_date_order(data.name, data.start_date, data.end_date)

        project = Project(
            owner_id=identity.id,
            name=data.name,
            description=data.description,
            location=data.location,
            status=data.status,
            budget_total=data.budget_total,
            budget_spent=0,
            budget_variance=BudgetLedger.variance(data.budget_total, 0),
            progress_percentage=0,
            start_date=data.start_date,
            end_date=data.end_date,
        )
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)

        metrics_collector.record_created("project")
        logger.info(f"Created project {project.id} for owner {identity.id}")
        return await self.get_visible(identity, project.id)

    async def update(
        self, identity: Optional[Identity], project_id: UUID, payload: Payload
    ) -> ProjectResponse:
        """
        Partially update a project. Omitted or null fields keep their stored
        value; budget changes recompute the variance against the stored side.

        Raises:
            Unauthenticated, Forbidden, InvalidInput, NotFound
        """
        identity = require_writer(identity, "projects")
        data = validate_payload(ProjectUpdate, payload)
        project = await self.authorize(identity, project_id, write=True)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        self.ledger.apply_project_changes(project, changes)
        for field, value in changes.items():
            if field in ("budget_total", "budget_spent"):
                continue
            setattr(project, field, value)

        _warn_on_date_order(project.name, project.start_date, project.end_date)
        project.updated_at = datetime.utcnow()

        await self.db.commit()
        await self.db.refresh(project)

        logger.info(f"Updated project {project_id} fields {sorted(changes)}")
        return await self.get_visible(identity, project_id)
