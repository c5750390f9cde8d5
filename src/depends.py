from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, raise_for_error
from src.api.utils.jwt import ACCESS_COOKIE, verify_jwt
from src.app.services.event_sink import IEventSink
from src.app.services.presence_tracker import PresenceTracker
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import LoadContextUseCase
from src.domain.context import TenantContext

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_presence(request: Request) -> PresenceTracker:
    return request.app.state.presence


def get_event_sink(request: Request) -> IEventSink:
    return request.app.state.events


def get_access_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Access token from the cookie, falling back to a bearer header"""
    token = request.cookies.get(ACCESS_COOKIE)
    if token:
        return token
    if credentials is not None:
        return credentials.credentials
    return None


async def get_current_context(
    token: Optional[str] = Depends(get_access_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    presence: PresenceTracker = Depends(get_presence),
) -> TenantContext:
    """
    Dependency resolving the tenant context of the caller.

    Raises:
        ClientError: 401 if the token is missing, invalid or no longer matches
            the stored user; 403 if the account is deactivated
    """
    if not token:
        raise ClientError(
            Error("UNAUTHENTICATED", "Authentication required"),
            status_code=401,
        )

    claims = verify_jwt(token)
    if claims is None:
        raise ClientError(
            Error("UNAUTHENTICATED", "Invalid or expired token"),
            status_code=401,
        )

    result = await LoadContextUseCase(uow, ApplicationConfig.PLATFORM_ORGANIZATION_ID).execute(claims)
    if result.is_err():
        raise_for_error(result.error)

    context = result.value
    presence.touch(context.actor_id)
    return context
