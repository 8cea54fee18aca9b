"""Repositories for employees, timesheets, field work, tasks and expenses"""

from typing import List, Optional

from domain.storage.tenant_filter import TenantFilter
from infrastructure.storage.references import delete_attachments, release_references
from models import (
    Employee,
    Expense,
    Installation,
    Survey,
    Task,
    TaskList,
    Timesheet,
)
from tenancy.verifier import RelatedEntityType

from .base import DateRangeMixin, EntityRepository, TenantArg


class EmployeeRepository(EntityRepository):
    model = Employee

    async def get_by_user_id(self, user_id: int, tenant: TenantArg = None) -> Optional[Employee]:
        return await self._find_one(tenant, user_id=user_id)


class TimesheetRepository(DateRangeMixin, EntityRepository):
    model = Timesheet
    date_column = "date"

    async def list_by_employee(self, employee_id: int, tenant: TenantArg = None) -> List[Timesheet]:
        return await self._list_by(tenant, employee_id=employee_id)

    async def list_by_project(self, project_id: int, tenant: TenantArg = None) -> List[Timesheet]:
        return await self._list_by(tenant, project_id=project_id)


class SurveyRepository(DateRangeMixin, EntityRepository):
    model = Survey
    date_column = "scheduled_date"

    async def list_by_project(self, project_id: int, tenant: TenantArg = None) -> List[Survey]:
        return await self._list_by(tenant, project_id=project_id)

    async def list_by_status(self, status: str, tenant: TenantArg = None) -> List[Survey]:
        return await self._list_by(tenant, status=status)


class InstallationRepository(DateRangeMixin, EntityRepository):
    model = Installation
    date_column = "scheduled_date"

    async def list_by_project(self, project_id: int, tenant: TenantArg = None) -> List[Installation]:
        return await self._list_by(tenant, project_id=project_id)

    async def list_by_status(self, status: str, tenant: TenantArg = None) -> List[Installation]:
        return await self._list_by(tenant, status=status)


class TaskListRepository(EntityRepository):
    model = TaskList

    async def list_by_project(self, project_id: int, tenant: TenantArg = None) -> List[TaskList]:
        return await self._list_by(tenant, project_id=project_id)

    async def _delete(self, tx, record_id, tenant=None) -> bool:
        """Task list with its tasks; snagging links to it are cleared."""
        if await tx.records(TaskList).get(record_id, TenantFilter.coerce(tenant)) is None:
            return False
        task_ids = [task.id for task in await tx.records(Task).list(task_list_id=record_id)]
        await delete_attachments(tx, RelatedEntityType.TASK, task_ids)
        await tx.records(Task).delete_where(task_list_id=record_id)
        await release_references(tx, TaskList, [record_id])
        await delete_attachments(tx, RelatedEntityType.TASK_LIST, [record_id])
        return await tx.records(TaskList).delete(record_id)


class TaskRepository(EntityRepository):
    """Tasks carry an explicit tenant that must equal their task list's."""

    model = Task

    async def list_by_task_list(self, task_list_id: int, tenant: TenantArg = None) -> List[Task]:
        return await self._list_by(tenant, task_list_id=task_list_id)

    async def list_by_assignee(self, user_id: int, tenant: TenantArg = None) -> List[Task]:
        return await self._list_by(tenant, assigned_to=user_id)


class ExpenseRepository(DateRangeMixin, EntityRepository):
    model = Expense
    date_column = "date"

    async def list_by_project(self, project_id: int, tenant: TenantArg = None) -> List[Expense]:
        return await self._list_by(tenant, project_id=project_id)

    async def list_by_supplier(self, supplier_id: int, tenant: TenantArg = None) -> List[Expense]:
        return await self._list_by(tenant, supplier_id=supplier_id)

    async def list_by_category(self, category: str, tenant: TenantArg = None) -> List[Expense]:
        return await self._list_by(tenant, category=category)
