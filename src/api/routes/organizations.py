from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.api.routes.schemas import OrganizationCreate, OrganizationUpdate
from src.app.services.event_sink import IEventSink
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.organizations import (
    CreateOrganizationUseCase,
    DeleteOrganizationUseCase,
    GetOrganizationUseCase,
    HardDeleteOrganizationUseCase,
    ListOrganizationsUseCase,
    OrganizationStatisticsUseCase,
    RestoreOrganizationUseCase,
    UpdateOrganizationUseCase,
)
from src.app.use_cases.resources import PaginatedResponse
from src.app.use_cases.resources.dtos import DEFAULT_LIMIT, MAX_LIMIT
from src.depends import get_current_context, get_event_sink, get_unit_of_work
from src.domain.context import TenantContext
from src.domain.entities import OrganizationSize

router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.get("", status_code=status.HTTP_200_OK, response_model=PaginatedResponse)
async def list_organizations(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    search: Optional[str] = Query(None, max_length=100),
    size: Optional[OrganizationSize] = None,
    include_deleted: bool = False,
    context: TenantContext = Depends(get_current_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Customer Organizations (platform admins only)

    Raises:
        - 403 Forbidden: Caller is not a platform SuperAdmin
    """
    result = await ListOrganizationsUseCase(uow).execute(
        context, page=page, limit=limit, search=search, size=size, include_deleted=include_deleted
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/statistics", status_code=status.HTTP_200_OK)
async def organization_statistics(
    context: TenantContext = Depends(get_current_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await OrganizationStatisticsUseCase(uow).execute(context)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{organization_id}", status_code=status.HTTP_200_OK)
async def get_organization(
    organization_id: UUID,
    include_deleted: bool = False,
    context: TenantContext = Depends(get_current_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetOrganizationUseCase(uow).execute(context, organization_id, include_deleted)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_organization(
    request: OrganizationCreate,
    context: TenantContext = Depends(get_current_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Raises:
        - 409 Conflict: Name or email held by an active organization
    """
    result = await CreateOrganizationUseCase(uow).execute(context, request.model_dump())
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/{organization_id}", status_code=status.HTTP_200_OK)
async def update_organization(
    organization_id: UUID,
    request: OrganizationUpdate,
    context: TenantContext = Depends(get_current_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    changes = request.model_dump(exclude_unset=True)
    result = await UpdateOrganizationUseCase(uow).execute(context, organization_id, changes)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{organization_id}", status_code=status.HTTP_200_OK)
async def delete_organization(
    organization_id: UUID,
    context: TenantContext = Depends(get_current_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    events: IEventSink = Depends(get_event_sink),
):
    """Soft delete, cascading to everything the organization owns"""
    result = await DeleteOrganizationUseCase(uow, events).execute(context, organization_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{organization_id}/restore", status_code=status.HTTP_200_OK)
async def restore_organization(
    organization_id: UUID,
    context: TenantContext = Depends(get_current_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    events: IEventSink = Depends(get_event_sink),
):
    """
    Raises:
        - 409 Conflict: Not deleted, or name/email now held by another organization
    """
    result = await RestoreOrganizationUseCase(uow, events).execute(context, organization_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{organization_id}/permanent", status_code=status.HTTP_200_OK)
async def hard_delete_organization(
    organization_id: UUID,
    context: TenantContext = Depends(get_current_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    events: IEventSink = Depends(get_event_sink),
):
    """Permanently remove the organization and all of its records"""
    result = await HardDeleteOrganizationUseCase(uow, events).execute(context, organization_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
