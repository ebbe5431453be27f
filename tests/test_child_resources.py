"""Tests for the child record gateways"""

import uuid
from datetime import datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from scafflow.exceptions import Forbidden, InvalidInput, NotFound, Unauthenticated
from scafflow.models import Project, Task, ProgressDraw
from scafflow.services.child_resources import (
    BudgetItemGateway,
    ChangeOrderGateway,
    ProgressDrawGateway,
    SafetyIncidentGateway,
    TaskGateway,
)


@pytest.mark.asyncio
class TestTaskGateway:
    """Test task reads, writes and the rollup they trigger"""

    async def test_create_rolls_up_progress(
        self, db_session: AsyncSession, sample_project: Project, owner_identity
    ):
        gateway = TaskGateway(db_session)

        await gateway.create(owner_identity, sample_project.id, {"title": "Dig", "progress_percentage": 80})
        task = await gateway.create(
            owner_identity, sample_project.id, {"title": "Pour", "progress_percentage": 40}
        )

        await db_session.refresh(sample_project)
        assert task.project_id == sample_project.id
        assert task.status == "pending"
        assert task.priority == "medium"
        assert sample_project.progress_percentage == 60

    async def test_admin_create_forbidden_before_validation(
        self, db_session, sample_project, admin_identity
    ):
        """Admins are rejected even with a payload that would fail validation"""
        with pytest.raises(Forbidden):
            await TaskGateway(db_session).create(admin_identity, sample_project.id, {})

    async def test_admin_create_forbidden_on_any_project(self, db_session, admin_identity):
        with pytest.raises(Forbidden):
            await TaskGateway(db_session).create(admin_identity, uuid.uuid4(), {"title": "T"})

    async def test_non_owner_create_forbidden(self, db_session, sample_project, other_identity):
        with pytest.raises(Forbidden):
            await TaskGateway(db_session).create(other_identity, sample_project.id, {"title": "T"})

    async def test_missing_title_is_invalid(self, db_session, sample_project, owner_identity):
        with pytest.raises(InvalidInput):
            await TaskGateway(db_session).create(owner_identity, sample_project.id, {"description": "x"})

    async def test_missing_project(self, db_session, owner_identity):
        with pytest.raises(NotFound):
            await TaskGateway(db_session).create(owner_identity, uuid.uuid4(), {"title": "T"})

    async def test_unauthenticated(self, db_session, sample_project):
        with pytest.raises(Unauthenticated):
            await TaskGateway(db_session).list(None, sample_project.id)

    async def test_non_owner_list_forbidden(self, db_session, sample_project, other_identity):
        with pytest.raises(Forbidden):
            await TaskGateway(db_session).list(other_identity, sample_project.id)

    async def test_owner_list_returns_only_that_project(
        self, db_session, sample_project, owner_user, owner_identity
    ):
        second = Project(owner_id=owner_user.id, name="Second")
        db_session.add(second)
        await db_session.commit()
        db_session.add_all([
            Task(project_id=sample_project.id, title="Old", created_at=datetime.utcnow() - timedelta(hours=1)),
            Task(project_id=sample_project.id, title="New"),
            Task(project_id=second.id, title="Elsewhere"),
        ])
        await db_session.commit()

        tasks = await TaskGateway(db_session).list(owner_identity, sample_project.id)

        assert [t.title for t in tasks] == ["New", "Old"]

    async def test_admin_list_allowed(self, db_session, sample_project, admin_identity):
        db_session.add(Task(project_id=sample_project.id, title="Visible"))
        await db_session.commit()

        tasks = await TaskGateway(db_session).list(admin_identity, sample_project.id)

        assert len(tasks) == 1

    async def test_update_merges_and_rolls_up(self, db_session, sample_project, owner_identity):
        gateway = TaskGateway(db_session)
        created = await gateway.create(
            owner_identity, sample_project.id, {"title": "Frame", "description": "Level 1"}
        )

        updated = await gateway.update(
            owner_identity, created.id, {"progress_percentage": 70, "description": None}
        )

        await db_session.refresh(sample_project)
        assert updated.progress_percentage == 70
        assert updated.title == "Frame"
        assert updated.description == "Level 1"
        assert sample_project.progress_percentage == 70

    async def test_update_without_progress_change_still_rolls_up(
        self, db_session, sample_project, owner_identity
    ):
        db_session.add(Task(project_id=sample_project.id, title="Stale", progress_percentage=30))
        sample_project.progress_percentage = 99
        await db_session.commit()
        task = (await TaskGateway(db_session).list(owner_identity, sample_project.id))[0]

        await TaskGateway(db_session).update(owner_identity, task.id, {"status": "in_progress"})

        await db_session.refresh(sample_project)
        assert sample_project.progress_percentage == 30

    async def test_update_cannot_move_task(self, db_session, sample_project, owner_user, owner_identity):
        second = Project(owner_id=owner_user.id, name="Second")
        db_session.add(second)
        await db_session.commit()
        created = await TaskGateway(db_session).create(owner_identity, sample_project.id, {"title": "Stay"})

        updated = await TaskGateway(db_session).update(
            owner_identity, created.id, {"project_id": str(second.id)}
        )

        assert updated.project_id == sample_project.id

    async def test_update_missing_task(self, db_session, owner_identity):
        with pytest.raises(NotFound):
            await TaskGateway(db_session).update(owner_identity, uuid.uuid4(), {"title": "X"})

    async def test_update_non_owner_forbidden(
        self, db_session, sample_project, owner_identity, other_identity
    ):
        created = await TaskGateway(db_session).create(owner_identity, sample_project.id, {"title": "Mine"})

        with pytest.raises(Forbidden):
            await TaskGateway(db_session).update(other_identity, created.id, {"title": "Theirs"})

    async def test_update_out_of_range_progress(self, db_session, sample_project, owner_identity):
        created = await TaskGateway(db_session).create(owner_identity, sample_project.id, {"title": "T"})

        with pytest.raises(InvalidInput):
            await TaskGateway(db_session).update(owner_identity, created.id, {"progress_percentage": 150})


@pytest.mark.asyncio
class TestBudgetItemGateway:
    """Test budget item variance at creation"""

    async def test_variance_after_creation(self, db_session, sample_project, owner_identity):
        item = await BudgetItemGateway(db_session).create(
            owner_identity,
            sample_project.id,
            {"category": "Concrete", "budget_amount": 900, "spent_amount": 350, "variance": 1},
        )

        assert item.variance == item.budget_amount - item.spent_amount == 550

    async def test_spent_defaults_to_zero(self, db_session, sample_project, owner_identity):
        item = await BudgetItemGateway(db_session).create(
            owner_identity, sample_project.id, {"category": "Steel", "budget_amount": 200}
        )

        assert item.spent_amount == 0
        assert item.variance == 200

    async def test_blank_category_invalid(self, db_session, sample_project, owner_identity):
        with pytest.raises(InvalidInput):
            await BudgetItemGateway(db_session).create(owner_identity, sample_project.id, {"category": ""})

    @pytest.mark.parametrize("field", ["budget_amount", "spent_amount"])
    @pytest.mark.parametrize("value", ["NaN", "Infinity", float("-inf"), 6e12])
    async def test_non_finite_or_oversized_amount_invalid(
        self, db_session, sample_project, owner_identity, field, value
    ):
        gateway = BudgetItemGateway(db_session)

        with pytest.raises(InvalidInput) as exc_info:
            await gateway.create(owner_identity, sample_project.id, {"category": "Glazing", field: value})

        assert exc_info.value.errors[0]["field"] == field
        assert await gateway.list(owner_identity, sample_project.id) == []


@pytest.mark.asyncio
class TestChangeOrderGateway:
    """Test change order creation"""

    async def test_requested_by_is_caller(self, db_session, sample_project, owner_identity, other_user):
        order = await ChangeOrderGateway(db_session).create(
            owner_identity,
            sample_project.id,
            {"title": "Extra rebar", "amount": 1200, "requested_by": str(other_user.id)},
        )

        assert order.requested_by == owner_identity.id
        assert order.status == "pending"

    async def test_any_status_accepted(self, db_session, sample_project, owner_identity):
        order = await ChangeOrderGateway(db_session).create(
            owner_identity, sample_project.id, {"amount": 10, "status": "approved"}
        )
        assert order.status == "approved"

    @pytest.mark.parametrize(
        "amount", [None, 0, "ten", "NaN", float("nan"), "Infinity", "-Infinity", 1e14]
    )
    async def test_amount_required_nonzero_numeric(
        self, db_session, sample_project, owner_identity, amount
    ):
        with pytest.raises(InvalidInput):
            await ChangeOrderGateway(db_session).create(
                owner_identity, sample_project.id, {"amount": amount}
            )


@pytest.mark.asyncio
class TestProgressDrawGateway:
    """Test progress draws"""

    async def test_requested_at_defaults_to_now(self, db_session, sample_project, owner_identity):
        before = datetime.utcnow() - timedelta(seconds=1)

        draw = await ProgressDrawGateway(db_session).create(
            owner_identity, sample_project.id, {"draw_number": "PD-1", "amount": 5000}
        )

        assert draw.status == "requested"
        assert draw.requested_at >= before

    async def test_listed_by_requested_at(self, db_session, sample_project, owner_identity):
        now = datetime.utcnow()
        db_session.add_all([
            ProgressDraw(project_id=sample_project.id, draw_number="PD-1", amount=1,
                         requested_at=now - timedelta(days=2)),
            ProgressDraw(project_id=sample_project.id, draw_number="PD-2", amount=2,
                         requested_at=now),
        ])
        await db_session.commit()

        draws = await ProgressDrawGateway(db_session).list(owner_identity, sample_project.id)

        assert [d.draw_number for d in draws] == ["PD-2", "PD-1"]

    async def test_amount_required(self, db_session, sample_project, owner_identity):
        with pytest.raises(InvalidInput):
            await ProgressDrawGateway(db_session).create(owner_identity, sample_project.id, {"draw_number": "PD-1"})

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", float("inf")])
    async def test_non_finite_amount_invalid(self, db_session, sample_project, owner_identity, amount):
        with pytest.raises(InvalidInput):
            await ProgressDrawGateway(db_session).create(
                owner_identity, sample_project.id, {"draw_number": "PD-1", "amount": amount}
            )


@pytest.mark.asyncio
class TestSafetyIncidentGateway:
    """Test safety incident reports"""

    async def test_reported_by_is_caller(self, db_session, sample_project, owner_identity):
        incident = await SafetyIncidentGateway(db_session).create(
            owner_identity,
            sample_project.id,
            {"severity": "high", "description": "Scaffold collapse"},
        )

        assert incident.reported_by == owner_identity.id
        assert incident.incident_type == "general"
        assert incident.status == "open"

    async def test_unknown_severity_invalid(self, db_session, sample_project, owner_identity):
        with pytest.raises(InvalidInput):
            await SafetyIncidentGateway(db_session).create(
                owner_identity, sample_project.id, {"severity": "catastrophic", "description": "x"}
            )

    async def test_admin_forbidden(self, db_session, sample_project, admin_identity):
        with pytest.raises(Forbidden):
            await SafetyIncidentGateway(db_session).create(
                admin_identity, sample_project.id, {"severity": "low", "description": "x"}
            )
