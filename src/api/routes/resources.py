"""
Generic resource routers.

One router per tenant-owned kind, all built by `build_router`. Every route
resolves the caller's tenant context and hands it to a use case that runs
the authorization check. Tasks and departments also expose read-only
relationship routes (`/tasks/{id}/comments`, `/departments/{id}/users`, ...).
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Type
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel

from src.libs.result import Error
from src.api.error import ClientError, raise_for_error
from src.api.routes import schemas
from src.app.services.event_sink import IEventSink
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.resources import (
    CreateResourceUseCase,
    DeleteResourceUseCase,
    GetResourceUseCase,
    ListRelatedUseCase,
    ListResourcesUseCase,
    PaginatedResponse,
    RestoreResourceUseCase,
    UpdateResourceUseCase,
)
from src.app.use_cases.resources.dtos import DEFAULT_LIMIT, MAX_LIMIT
from src.depends import get_current_context, get_event_sink, get_unit_of_work
from src.domain.context import TenantContext
from src.domain.entities import (
    ActivityStatus,
    AttachmentParent,
    EntityKind,
    NotificationType,
    Role,
    TaskPriority,
    TaskStatus,
    TaskType,
    UserStatus,
)


def parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise ValueError(value)


# Query parameters accepted as equality filters on list endpoints
LIST_FILTERS: Dict[EntityKind, Dict[str, Callable[[str], Any]]] = {
    EntityKind.department: {},
    EntityKind.user: {"department_id": UUID, "role": Role, "status": UserStatus},
    EntityKind.task: {
        "department_id": UUID,
        "status": TaskStatus,
        "priority": TaskPriority,
        "task_type": TaskType,
        "created_by": UUID,
    },
    EntityKind.task_activity: {"task_id": UUID, "status": ActivityStatus, "assigned_to": UUID},
    EntityKind.task_comment: {"task_id": UUID, "parent_comment_id": UUID},
    EntityKind.material: {"category": str},
    EntityKind.vendor: {},
    EntityKind.attachment: {"attached_to": UUID, "attached_to_kind": AttachmentParent},
    EntityKind.notification: {"is_read": parse_bool, "type": NotificationType},
}


def list_filters(request: Request, kind: EntityKind) -> Dict[str, Any]:
    filters = {}
    for name, convert in LIST_FILTERS[kind].items():
        raw = request.query_params.get(name)
        if raw is None or raw == "":
            continue
        try:
            filters[name] = convert(raw)
        except ValueError:
            raise ClientError(
                Error("VALIDATION_ERROR", f"Invalid value for {name}"),
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
    return filters


def related_endpoint(kind: EntityKind, relation: str):
    async def list_related(
        record_id: UUID,
        context: TenantContext = Depends(get_current_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ):
        result = await ListRelatedUseCase(uow).execute(context, kind, record_id, relation)
        if result.is_err():
            raise_for_error(result.error)
        return result.value

    list_related.__name__ = f"list_{kind.name}_{relation}"
    return list_related


def build_router(
    kind: EntityKind,
    path: str,
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    tag: str,
    related: Sequence[str] = (),
) -> APIRouter:
    router = APIRouter(prefix=f"/{path}", tags=[tag])

    for relation in related:
        router.add_api_route(
            f"/{{record_id}}/{relation}",
            related_endpoint(kind, relation),
            methods=["GET"],
            status_code=status.HTTP_200_OK,
        )

    @router.get("", status_code=status.HTTP_200_OK, response_model=PaginatedResponse)
    async def list_records(
        request: Request,
        page: int = Query(1, ge=1),
        limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
        search: Optional[str] = Query(None, max_length=100),
        include_deleted: bool = False,
        organization_id: Optional[UUID] = None,
        context: TenantContext = Depends(get_current_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ):
        result = await ListResourcesUseCase(uow).execute(
            context,
            kind,
            page=page,
            limit=limit,
            search=search,
            include_deleted=include_deleted,
            filters=list_filters(request, kind),
            organization_id=organization_id,
        )
        if result.is_err():
            raise_for_error(result.error)
        return result.value

    @router.get("/{record_id}", status_code=status.HTTP_200_OK)
    async def get_record(
        record_id: UUID,
        include_deleted: bool = False,
        context: TenantContext = Depends(get_current_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ):
        result = await GetResourceUseCase(uow).execute(context, kind, record_id, include_deleted)
        if result.is_err():
            raise_for_error(result.error)
        return result.value

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_record(
        payload: create_model,
        context: TenantContext = Depends(get_current_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ):
        result = await CreateResourceUseCase(uow).execute(context, kind, payload.model_dump(exclude_unset=True))
        if result.is_err():
            raise_for_error(result.error)
        return result.value

    @router.patch("/{record_id}", status_code=status.HTTP_200_OK)
    async def update_record(
        record_id: UUID,
        payload: update_model,
        context: TenantContext = Depends(get_current_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ):
        changes = payload.model_dump(exclude_unset=True)
        result = await UpdateResourceUseCase(uow).execute(context, kind, record_id, changes)
        if result.is_err():
            raise_for_error(result.error)
        return result.value

    @router.delete("/{record_id}", status_code=status.HTTP_200_OK)
    async def delete_record(
        record_id: UUID,
        context: TenantContext = Depends(get_current_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
        events: IEventSink = Depends(get_event_sink),
    ):
        """Soft delete; descendants are tombstoned with the record"""
        result = await DeleteResourceUseCase(uow, events).execute(context, kind, record_id)
        if result.is_err():
            raise_for_error(result.error)
        return result.value

    @router.post("/{record_id}/restore", status_code=status.HTTP_200_OK)
    async def restore_record(
        record_id: UUID,
        context: TenantContext = Depends(get_current_context),
        uow: UnitOfWork = Depends(get_unit_of_work),
        events: IEventSink = Depends(get_event_sink),
    ):
        result = await RestoreResourceUseCase(uow, events).execute(context, kind, record_id)
        if result.is_err():
            raise_for_error(result.error)
        return result.value

    return router


RESOURCE_ROUTES = (
    (
        EntityKind.department,
        "departments",
        schemas.DepartmentCreate,
        schemas.DepartmentUpdate,
        "Departments",
        ("users", "hods"),
    ),
    (EntityKind.user, "users", schemas.UserCreate, schemas.UserUpdate, "Users"),
    (
        EntityKind.task,
        "tasks",
        schemas.TaskCreate,
        schemas.TaskUpdate,
        "Tasks",
        ("comments", "activities", "attachments"),
    ),
    (
        EntityKind.task_activity,
        "task-activities",
        schemas.TaskActivityCreate,
        schemas.TaskActivityUpdate,
        "Task Activities",
    ),
    (
        EntityKind.task_comment,
        "task-comments",
        schemas.TaskCommentCreate,
        schemas.TaskCommentUpdate,
        "Task Comments",
    ),
    (EntityKind.material, "materials", schemas.MaterialCreate, schemas.MaterialUpdate, "Materials"),
    (EntityKind.vendor, "vendors", schemas.VendorCreate, schemas.VendorUpdate, "Vendors"),
    (EntityKind.attachment, "attachments", schemas.AttachmentCreate, schemas.AttachmentUpdate, "Attachments"),
    (
        EntityKind.notification,
        "notifications",
        schemas.NotificationCreate,
        schemas.NotificationUpdate,
        "Notifications",
    ),
)


def routers() -> List[APIRouter]:
    return [build_router(*route) for route in RESOURCE_ROUTES]
