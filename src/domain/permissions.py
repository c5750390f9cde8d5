"""
Authorization matrices and checks.

Two static tables must agree before an action is granted:
- role x resource kind -> actions the role may ever perform
- role x scope level -> permission buckets granted at that distance

Unknown roles are denied everything.
"""

from typing import Any, Optional

from src.domain.context import TenantContext
from src.domain.entities import Action, EntityKind, Permission, Role, ScopeLevel
from src.domain.scope import resolve_scope, scope_target_of

R, W, D = Permission.read, Permission.write, Permission.delete
C, RD, U, DL, RS = Action.create, Action.read, Action.update, Action.delete, Action.restore

SCOPE_PERMISSIONS = {
    Role.super_admin: {
        ScopeLevel.own: {R, W, D},
        ScopeLevel.own_dept: {R, W, D},
        ScopeLevel.cross_dept: {R, W, D},
        ScopeLevel.cross_org: {R, W, D},  # reachable by platform actors only
    },
    Role.admin: {
        ScopeLevel.own: {R, W, D},
        ScopeLevel.own_dept: {R, W, D},
        ScopeLevel.cross_dept: {R},
        ScopeLevel.cross_org: set(),
    },
    Role.manager: {
        ScopeLevel.own: {R, W, D},
        ScopeLevel.own_dept: {R, W},
        ScopeLevel.cross_dept: {R},
        ScopeLevel.cross_org: set(),
    },
    Role.user: {
        ScopeLevel.own: {R, W},
        ScopeLevel.own_dept: {R},
        ScopeLevel.cross_dept: set(),
        ScopeLevel.cross_org: set(),
    },
}

RESOURCE_PERMISSIONS = {
    Role.super_admin: {
        EntityKind.user: {C, RD, U, DL, RS},
        EntityKind.department: {C, RD, U, DL, RS},
        EntityKind.organization: {C, RD, U, DL, RS},
        EntityKind.task: {C, RD, U, DL, RS},
        EntityKind.material: {C, RD, U, DL, RS},
        EntityKind.vendor: {C, RD, U, DL, RS},
        EntityKind.notification: {RD, U, DL},
        EntityKind.attachment: {C, RD, DL},
    },
    Role.admin: {
        EntityKind.user: {C, RD, U, DL, RS},
        EntityKind.department: {C, RD, U, DL, RS},
        EntityKind.organization: {RD},
        EntityKind.task: {C, RD, U, DL, RS},
        EntityKind.material: {C, RD, U, DL, RS},
        EntityKind.vendor: {C, RD, U, DL, RS},
        EntityKind.notification: {RD, U, DL},
        EntityKind.attachment: {C, RD, DL},
    },
    Role.manager: {
        EntityKind.user: {RD, U},
        EntityKind.department: {RD},
        EntityKind.organization: {RD},
        EntityKind.task: {C, RD, U, DL},
        EntityKind.material: {C, RD, U},
        EntityKind.vendor: {RD, U},
        EntityKind.notification: {RD, U},
        EntityKind.attachment: {C, RD, DL},
    },
    Role.user: {
        EntityKind.user: {RD},
        EntityKind.department: {RD},
        EntityKind.organization: {RD},
        EntityKind.task: {C, RD, U},
        EntityKind.material: {RD},
        EntityKind.vendor: {RD},
        EntityKind.notification: {RD, U},
        EntityKind.attachment: {C, RD},
    },
}

# Activities and comments are governed by the task row
RESOURCE_ALIASES = {
    EntityKind.task_activity: EntityKind.task,
    EntityKind.task_comment: EntityKind.task,
}

ACTION_BUCKETS = {
    Action.create: Permission.write,
    Action.read: Permission.read,
    Action.update: Permission.write,
    Action.delete: Permission.delete,
    Action.restore: Permission.write,
}


def is_platform_admin(context: TenantContext) -> bool:
    """Platform management requires the platform organization and the top role"""
    return context.is_platform_admin and context.role == Role.super_admin


def authorize(
    context: TenantContext,
    action: Action,
    kind: EntityKind,
    target: Optional[Any] = None,
) -> bool:
    """
    Decide whether the actor may perform `action` on `kind`.

    Without a target only the resource matrix is consulted (list/create
    checks). With a target, the scope between actor and target must also
    grant the action's bucket.
    """
    resource_permissions = RESOURCE_PERMISSIONS.get(context.role)
    scope_permissions = SCOPE_PERMISSIONS.get(context.role)
    if resource_permissions is None or scope_permissions is None:
        return False

    allowed = resource_permissions.get(RESOURCE_ALIASES.get(kind, kind), set())
    if action not in allowed:
        return False

    if target is None:
        return True

    scope = resolve_scope(context, scope_target_of(kind, target))
    if scope is None:
        return False

    return ACTION_BUCKETS[action] in scope_permissions.get(scope, set())


ROLE_ORDER = (Role.super_admin, Role.admin, Role.manager, Role.user)


def role_rank(role: Any) -> int:
    """Position in ROLE_ORDER, lower is more privileged; unknown roles rank last"""
    try:
        return ROLE_ORDER.index(Role(role))
    except ValueError:
        return len(ROLE_ORDER)


def can_assign_role(context: TenantContext, role: Any, user: Optional[Any] = None) -> bool:
    """
    Whether the actor may give `role` to a new user, or to the existing `user`.

    Actors never change their own role, never hand out a role above their
    own, and never touch the role of a user who outranks them.
    """
    if role_rank(role) < role_rank(context.role):
        return False
    if user is None:
        return True
    if str(user.id) == str(context.actor_id):
        return False
    return role_rank(user.role) >= role_rank(context.role)


def can_set_password(context: TenantContext, user: Any) -> bool:
    """Actors reset their own password; only HOD roles reset someone else's"""
    return str(user.id) == str(context.actor_id) or context.is_hod
