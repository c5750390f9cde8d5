from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.event_sink import IEventSink
from src.app.services.presence_tracker import PresenceTracker
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import GetStatusUseCase, UpdateStatusUseCase
from src.depends import get_current_context, get_event_sink, get_presence, get_unit_of_work
from src.domain.context import TenantContext
from src.domain.entities import UserStatus

router = APIRouter(prefix="/users", tags=["Presence"])


class UpdateStatusRequest(BaseModel):
    status: UserStatus = Field(..., description="online, away or offline")


@router.patch("/me/status", status_code=status.HTTP_200_OK)
async def update_my_status(
    request: UpdateStatusRequest,
    context: TenantContext = Depends(get_current_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    presence: PresenceTracker = Depends(get_presence),
    events: IEventSink = Depends(get_event_sink),
):
    """
    Raises:
        - 422 Unprocessable Entity: Transition not allowed (e.g. offline -> away)
    """
    result = await UpdateStatusUseCase(uow, presence, events).execute(context.actor_id, request.status)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{user_id}/status", status_code=status.HTTP_200_OK)
async def get_user_status(
    user_id: UUID,
    context: TenantContext = Depends(get_current_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    presence: PresenceTracker = Depends(get_presence),
):
    result = await GetStatusUseCase(uow, presence).execute(context, user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
