from uuid import uuid4

import pytest

from src.domain.context import TenantContext
from src.domain.entities import Action, EntityKind, Role
from src.domain.permissions import (
    RESOURCE_PERMISSIONS,
    SCOPE_PERMISSIONS,
    authorize,
    can_assign_role,
    can_set_password,
    is_platform_admin,
    role_rank,
)
from tests.factories import make_context, make_organization, make_task, make_user


def _unknown_role_context(role):
    return TenantContext(
        actor_id=uuid4(),
        tenant_id=uuid4(),
        subtenant_id=uuid4(),
        role=role,
        is_hod=False,
        is_platform_admin=False,
    )


@pytest.mark.parametrize("role", ["Guest", None, ""])
def test_unknown_role_is_denied_everything(role):
    context = _unknown_role_context(role)
    own_task = make_task(context.tenant_id, context.subtenant_id, context.actor_id)

    for kind in EntityKind:
        for action in Action:
            assert authorize(context, action, kind) is False
    assert authorize(context, Action.read, EntityKind.task, own_task) is False


def test_every_role_has_both_matrices():
    assert set(SCOPE_PERMISSIONS) == set(RESOURCE_PERMISSIONS) == set(Role)


def test_cross_tenant_read_is_denied_even_for_super_admin():
    context = make_context(Role.super_admin)
    foreign_task = make_task(uuid4(), uuid4(), uuid4())

    assert authorize(context, Action.read, EntityKind.task, foreign_task) is False


def test_manager_may_update_colleague_task_in_own_department():
    context = make_context(Role.manager)
    colleague_task = make_task(context.tenant_id, context.subtenant_id, created_by=uuid4())

    assert authorize(context, Action.update, EntityKind.task, colleague_task) is True


def test_manager_may_not_delete_colleague_task_in_own_department():
    context = make_context(Role.manager)
    colleague_task = make_task(context.tenant_id, context.subtenant_id, created_by=uuid4())

    assert authorize(context, Action.delete, EntityKind.task, colleague_task) is False


def test_manager_cannot_delete_users_or_create_vendors():
    context = make_context(Role.manager)

    assert authorize(context, Action.delete, EntityKind.user) is False
    assert authorize(context, Action.create, EntityKind.vendor) is False


def test_admin_reads_but_cannot_write_other_departments():
    context = make_context(Role.admin)
    other_department_user = make_user(context.tenant_id, uuid4())

    assert authorize(context, Action.read, EntityKind.user, other_department_user) is True
    assert authorize(context, Action.update, EntityKind.user, other_department_user) is False


def test_user_may_update_own_task_but_not_colleague_task():
    context = make_context(Role.user)
    own_task = make_task(context.tenant_id, context.subtenant_id, context.actor_id)
    colleague_task = make_task(context.tenant_id, context.subtenant_id, uuid4())

    assert authorize(context, Action.update, EntityKind.task, own_task) is True
    assert authorize(context, Action.update, EntityKind.task, colleague_task) is False
    assert authorize(context, Action.read, EntityKind.task, colleague_task) is True


def test_comments_follow_task_permissions():
    context = make_context(Role.user)

    assert authorize(context, Action.create, EntityKind.task_comment) is True
    assert authorize(context, Action.delete, EntityKind.task_activity) is False


def test_restore_uses_write_bucket():
    context = make_context(Role.admin)
    department_task = make_task(context.tenant_id, context.subtenant_id, uuid4())

    assert authorize(context, Action.restore, EntityKind.task, department_task) is True


class TestPlatformAdmin:
    def test_platform_super_admin_passes_guard(self):
        assert is_platform_admin(make_context(Role.super_admin, platform=True)) is True

    def test_customer_super_admin_fails_guard(self):
        assert is_platform_admin(make_context(Role.super_admin)) is False

    def test_platform_admin_role_fails_guard(self):
        assert is_platform_admin(make_context(Role.admin, platform=True)) is False

    def test_platform_super_admin_reaches_other_organizations(self):
        context = make_context(Role.super_admin, platform=True)
        organization = make_organization()

        assert authorize(context, Action.update, EntityKind.organization, organization) is True


class TestRoleAssignment:
    def test_ranks_follow_role_order(self):
        assert [role_rank(role) for role in Role] == [0, 1, 2, 3]
        assert role_rank("Intern") == 4

    def test_manager_cannot_hand_out_higher_roles(self):
        context = make_context(Role.manager)
        colleague = make_user(context.tenant_id, context.subtenant_id)

        assert can_assign_role(context, Role.admin, colleague) is False
        assert can_assign_role(context, Role.super_admin) is False
        assert can_assign_role(context, Role.manager, colleague) is True

    def test_nobody_changes_own_role(self):
        context = make_context(Role.super_admin)
        me = make_user(context.tenant_id, context.subtenant_id, role=Role.super_admin, id=context.actor_id)

        assert can_assign_role(context, Role.user, me) is False

    def test_admin_cannot_re_role_super_admin(self):
        context = make_context(Role.admin)
        boss = make_user(context.tenant_id, context.subtenant_id, role=Role.super_admin)

        assert can_assign_role(context, Role.user, boss) is False

    def test_password_reset_of_others_needs_hod(self):
        manager = make_context(Role.manager)
        admin = make_context(Role.admin)
        colleague = make_user(manager.tenant_id, manager.subtenant_id)
        me = make_user(manager.tenant_id, manager.subtenant_id, role=Role.manager, id=manager.actor_id)

        assert can_set_password(manager, colleague) is False
        assert can_set_password(manager, me) is True
        assert can_set_password(admin, colleague) is True
