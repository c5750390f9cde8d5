import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from src.app.use_cases.resources.create_resource_use_case import CreateResourceUseCase
from src.app.use_cases.resources.delete_resource_use_case import DeleteResourceUseCase
from src.app.use_cases.resources.get_resource_use_case import GetResourceUseCase
from src.app.use_cases.resources.list_related_use_case import ListRelatedUseCase
from src.app.use_cases.resources.list_resources_use_case import ListResourcesUseCase
from src.app.use_cases.resources.restore_resource_use_case import RestoreResourceUseCase
from src.app.use_cases.resources.update_resource_use_case import UpdateResourceUseCase
from src.domain.entities import EntityKind, Role, TaskComment, TaskStatus, TaskType
from tests.factories import make_context, make_department, make_task, make_user


class TestCreate:
    @pytest.mark.asyncio
    async def test_department_lands_in_actor_organization(self, mock_uow):
        context = make_context(Role.admin)

        result = await CreateResourceUseCase(mock_uow).execute(
            context, EntityKind.department, {"name": "Logistics"}
        )

        assert result.is_ok()
        assert result.value["organization_id"] == str(context.tenant_id)
        assert result.value["is_deleted"] is False
        mock_uow.departments.create.assert_awaited_once()
        mock_uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_role_without_create_permission(self, mock_uow):
        result = await CreateResourceUseCase(mock_uow).execute(
            make_context(Role.user), EntityKind.department, {"name": "Logistics"}
        )

        assert result.error.code == "FORBIDDEN"
        mock_uow.departments.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_department_name(self, mock_uow):
        mock_uow.departments.count.return_value = 1

        result = await CreateResourceUseCase(mock_uow).execute(
            make_context(Role.admin), EntityKind.department, {"name": "Logistics"}
        )

        assert result.error.code == "DUPLICATE_ENTRY"
        assert result.error.details == {"fields": ["organization_id", "name"]}

    @pytest.mark.asyncio
    async def test_routine_task_rejects_low_priority(self, mock_uow):
        context = make_context(Role.manager)
        mock_uow.departments.get_by_id.return_value = make_department(
            context.tenant_id, id=context.subtenant_id
        )

        result = await CreateResourceUseCase(mock_uow).execute(
            context,
            EntityKind.task,
            {"title": "Sweep", "task_type": TaskType.routine, "status": TaskStatus.in_progress, "priority": "Low"},
        )

        assert result.error.code == "INVALID_ROUTINE_TASK_PRIORITY"

    @pytest.mark.asyncio
    async def test_non_hod_cannot_place_in_other_department(self, mock_uow):
        context = make_context(Role.manager)

        result = await CreateResourceUseCase(mock_uow).execute(
            context,
            EntityKind.task,
            {"title": "Sweep", "task_type": TaskType.routine, "department_id": uuid4()},
        )

        assert result.error.code == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_admin_cannot_grant_super_admin(self, mock_uow):
        context = make_context(Role.admin)
        mock_uow.departments.get_by_id.return_value = make_department(
            context.tenant_id, id=context.subtenant_id
        )

        result = await CreateResourceUseCase(mock_uow).execute(
            context,
            EntityKind.user,
            {
                "first_name": "New",
                "last_name": "Boss",
                "email": "boss@example.com",
                "password": "Password123!",
                "position": "Director",
                "role": Role.super_admin,
            },
        )

        assert result.error.code == "FORBIDDEN"


class TestReadAndUpdate:
    @pytest.mark.asyncio
    async def test_get_other_organization_record_is_forbidden(self, mock_uow):
        mock_uow.tasks.get_by_id.return_value = make_task(uuid4(), uuid4(), uuid4())

        result = await GetResourceUseCase(mock_uow).execute(make_context(Role.super_admin), EntityKind.task, uuid4())

        assert result.error.code == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_include_deleted_requires_restore_permission(self, mock_uow):
        result = await GetResourceUseCase(mock_uow).execute(
            make_context(Role.user), EntityKind.task, uuid4(), include_deleted=True
        )

        assert result.error.code == "FORBIDDEN"
        mock_uow.tasks.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_is_confined_to_department_for_users(self, mock_uow):
        context = make_context(Role.user)

        result = await ListResourcesUseCase(mock_uow).execute(context, EntityKind.task)

        assert result.is_ok()
        query = mock_uow.tasks.find.await_args.args[0]
        assert query == {"organization_id": context.tenant_id, "department_id": context.subtenant_id}
        assert mock_uow.tasks.find.await_args.kwargs["include_deleted"] is False

    @pytest.mark.asyncio
    async def test_list_other_organization_requires_platform(self, mock_uow):
        result = await ListResourcesUseCase(mock_uow).execute(
            make_context(Role.super_admin), EntityKind.user, organization_id=uuid4()
        )

        assert result.error.code == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_platform_admin_lists_other_organization(self, mock_uow):
        target = uuid4()

        result = await ListResourcesUseCase(mock_uow).execute(
            make_context(Role.super_admin, platform=True), EntityKind.user, organization_id=target
        )

        assert result.is_ok()
        assert mock_uow.users.find.await_args.args[0] == {"organization_id": target}

    @pytest.mark.asyncio
    async def test_update_ignores_immutable_fields(self, mock_uow):
        context = make_context(Role.admin)
        department = make_department(context.tenant_id, id=context.subtenant_id)
        mock_uow.departments.get_by_id.return_value = department

        result = await UpdateResourceUseCase(mock_uow).execute(
            context,
            EntityKind.department,
            department.id,
            {"name": "Renamed", "organization_id": uuid4(), "is_deleted": True},
        )

        assert result.is_ok()
        assert department.name == "Renamed"
        assert department.organization_id == context.tenant_id
        assert department.is_deleted is False


class TestDeleteAndRestore:
    @pytest.mark.asyncio
    async def test_delete_cascades_and_publishes_after_commit(self, mock_uow):
        context = make_context(Role.admin)
        department = make_department(context.tenant_id, id=context.subtenant_id)
        member = make_user(context.tenant_id, department.id)
        mock_uow.departments.get_by_id.return_value = department
        mock_uow.users.find.return_value = [member]
        events = MagicMock()
        events.publish = AsyncMock()

        result = await DeleteResourceUseCase(mock_uow, events).execute(context, EntityKind.department, department.id)

        assert result.is_ok()
        assert result.value["cascaded"] == {"User": 1}
        assert department.is_deleted is True
        mock_uow.commit.assert_awaited_once()
        events.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_twice(self, mock_uow):
        context = make_context(Role.admin)
        department = make_department(context.tenant_id, id=context.subtenant_id)
        department.soft_delete(context.actor_id)
        mock_uow.departments.get_by_id.return_value = department

        result = await DeleteResourceUseCase(mock_uow).execute(context, EntityKind.department, department.id)

        assert result.error.code == "ALREADY_DELETED"
        mock_uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cannot_delete_self(self, mock_uow):
        context = make_context(Role.admin)
        me = make_user(context.tenant_id, context.subtenant_id, role=Role.admin, id=context.actor_id)
        mock_uow.users.get_by_id.return_value = me

        result = await DeleteResourceUseCase(mock_uow).execute(context, EntityKind.user, me.id)

        assert result.error.code == "FORBIDDEN"
        assert me.is_deleted is False

    @pytest.mark.asyncio
    async def test_manager_cannot_delete_colleague_task(self, mock_uow):
        context = make_context(Role.manager)
        mock_uow.tasks.get_by_id.return_value = make_task(context.tenant_id, context.subtenant_id, uuid4())

        result = await DeleteResourceUseCase(mock_uow).execute(context, EntityKind.task, uuid4())

        assert result.error.code == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_restore_active_record(self, mock_uow):
        context = make_context(Role.admin)
        mock_uow.departments.get_by_id.return_value = make_department(context.tenant_id, id=context.subtenant_id)

        result = await RestoreResourceUseCase(mock_uow).execute(context, EntityKind.department, context.subtenant_id)

        assert result.error.code == "NOT_DELETED"

    @pytest.mark.asyncio
    async def test_restore_conflict(self, mock_uow):
        context = make_context(Role.admin)
        department = make_department(context.tenant_id, id=context.subtenant_id)
        department.soft_delete(context.actor_id)
        mock_uow.departments.get_by_id.return_value = department
        mock_uow.departments.count.return_value = 1

        result = await RestoreResourceUseCase(mock_uow).execute(context, EntityKind.department, department.id)

        assert result.error.code == "RESTORE_CONFLICT"
        assert department.is_deleted is True
        mock_uow.commit.assert_not_awaited()


class TestCrossDepartmentPlacement:
    @pytest.mark.asyncio
    async def test_admin_cannot_create_task_in_other_department(self, mock_uow):
        result = await CreateResourceUseCase(mock_uow).execute(
            make_context(Role.admin),
            EntityKind.task,
            {
                "title": "Audit",
                "task_type": TaskType.routine,
                "status": TaskStatus.in_progress,
                "department_id": uuid4(),
            },
        )

        assert result.error.code == "FORBIDDEN"
        mock_uow.tasks.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_super_admin_creates_task_in_other_department(self, mock_uow):
        context = make_context(Role.super_admin)
        other = make_department(context.tenant_id)
        mock_uow.departments.get_by_id.return_value = other

        result = await CreateResourceUseCase(mock_uow).execute(
            context,
            EntityKind.task,
            {
                "title": "Audit",
                "task_type": TaskType.routine,
                "status": TaskStatus.in_progress,
                "department_id": other.id,
            },
        )

        assert result.is_ok()
        assert result.value["department_id"] == str(other.id)

    @pytest.mark.asyncio
    async def test_admin_cannot_move_user_out_of_department(self, mock_uow):
        context = make_context(Role.admin)
        member = make_user(context.tenant_id, context.subtenant_id)
        mock_uow.users.get_by_id.return_value = member

        result = await UpdateResourceUseCase(mock_uow).execute(
            context, EntityKind.user, member.id, {"department_id": uuid4()}
        )

        assert result.error.code == "FORBIDDEN"
        assert member.department_id == context.subtenant_id
        mock_uow.commit.assert_not_awaited()


class TestListRelated:
    @pytest.mark.asyncio
    async def test_comments_of_readable_task(self, mock_uow):
        context = make_context(Role.user)
        task = make_task(context.tenant_id, context.subtenant_id, uuid4())
        comment = TaskComment(
            content="Done",
            task_id=task.id,
            organization_id=context.tenant_id,
            department_id=context.subtenant_id,
            created_by=context.actor_id,
        )
        mock_uow.tasks.get_by_id.return_value = task
        mock_uow.tasks.get_comments = AsyncMock(return_value=[comment])

        result = await ListRelatedUseCase(mock_uow).execute(context, EntityKind.task, task.id, "comments")

        assert result.is_ok()
        assert [item["content"] for item in result.value["items"]] == ["Done"]
        mock_uow.tasks.get_comments.assert_awaited_once_with(task.id)

    @pytest.mark.asyncio
    async def test_users_of_other_department_hidden_from_plain_user(self, mock_uow):
        context = make_context(Role.user)
        mock_uow.departments.get_by_id.return_value = make_department(context.tenant_id)
        mock_uow.users.get_by_department = AsyncMock(return_value=[])

        result = await ListRelatedUseCase(mock_uow).execute(context, EntityKind.department, uuid4(), "users")

        assert result.error.code == "FORBIDDEN"
        mock_uow.users.get_by_department.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_relation(self, mock_uow):
        result = await ListRelatedUseCase(mock_uow).execute(make_context(), EntityKind.vendor, uuid4(), "users")

        assert result.error.code == "NOT_FOUND"
