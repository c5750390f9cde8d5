from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.libs.result import Error
from src.api.error import ClientError, raise_for_error
from src.api.utils.jwt import REFRESH_COOKIE, clear_auth_cookies, set_auth_cookies, verify_jwt
from src.app.services.presence_tracker import PresenceTracker
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    UserInfo,
)
from src.depends import get_access_token, get_current_context, get_presence, get_unit_of_work
from src.domain.context import TenantContext
from src.domain.entities import OrganizationSize

router = APIRouter(tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Creates an organization together with its first department and SuperAdmin.
    """

    organization_name: str = Field(..., min_length=1, max_length=100)
    organization_email: EmailStr
    organization_phone: str = Field(..., min_length=1, max_length=20)
    organization_address: str = Field(..., min_length=1, max_length=200)
    organization_industry: str = Field(..., min_length=1, max_length=100)
    organization_size: OrganizationSize = OrganizationSize.small
    organization_description: Optional[str] = Field(default=None, max_length=500)
    department_name: str = Field(..., min_length=1, max_length=100)
    department_description: Optional[str] = Field(default=None, max_length=500)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    position: str = Field(..., min_length=1, max_length=100)


class RegisterResult(BaseModel):
    user: UserInfo
    organization_id: str
    department_id: str


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    organization_id: Optional[UUID] = Field(default=None, description="Organization to sign in to")


class LoginResult(BaseModel):
    """Tokens are delivered as HTTP-only cookies only"""

    user: UserInfo


class MessageResponse(BaseModel):
    message: str


class MeResponse(BaseModel):
    """GET /me response payload"""

    user_id: str
    organization_id: str
    department_id: str
    role: str
    is_hod: bool
    is_platform_admin: bool


@router.post("/auth/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResult)
async def register(
    request: RegisterRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    presence: PresenceTracker = Depends(get_presence),
):
    """
    Register Organization

    Raises:
        - 409 Conflict: Organization name or email already in use
        - 422 Unprocessable Entity: Invalid input
    """
    command = RegisterCommand(**request.model_dump(mode="json"))
    result = await RegisterUseCase(uow).execute(command)
    if result.is_err():
        raise_for_error(result.error)

    registered = result.value
    set_auth_cookies(response, registered.access_token, registered.refresh_token)
    presence.mark_online(UUID(registered.user.id))
    return RegisterResult(
        user=registered.user,
        organization_id=registered.organization_id,
        department_id=registered.department_id,
    )


@router.post("/auth/login", status_code=status.HTTP_200_OK, response_model=LoginResult)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    presence: PresenceTracker = Depends(get_presence),
):
    """
    User Login

    Sets the access_token and refresh_token cookies.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account, organization or department deactivated
        - 409 Conflict: Email exists in several organizations, pick one
    """
    use_case = LoginUseCase(uow, presence, ApplicationConfig.PLATFORM_ORGANIZATION_ID)
    result = await use_case.execute(request.email, request.password, request.organization_id)
    if result.is_err():
        raise_for_error(result.error)

    set_auth_cookies(response, result.value.access_token, result.value.refresh_token)
    return LoginResult(user=result.value.user)


@router.post("/auth/refresh", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def refresh(request: Request, response: Response, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Rotate both cookies using the refresh_token cookie.

    Raises:
        - 401 Unauthorized: Missing, invalid, expired or already rotated token
        - 403 Forbidden: Account deactivated
    """
    refresh_token = request.cookies.get(REFRESH_COOKIE)
    if not refresh_token:
        raise ClientError(
            Error("UNAUTHENTICATED", "Refresh token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    result = await RefreshTokenUseCase(uow).execute(refresh_token)
    if result.is_err():
        clear_auth_cookies(response)
        raise_for_error(result.error)

    set_auth_cookies(response, result.value.access_token, result.value.refresh_token)
    return MessageResponse(message="Tokens refreshed")


@router.post("/auth/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_access_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    presence: PresenceTracker = Depends(get_presence),
):
    """Clears the cookies; works with an expired or missing session too"""
    claims = verify_jwt(token) if token else None
    user_id = UUID(claims["user_id"]) if claims else None

    result = await LogoutUseCase(uow, presence).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)

    clear_auth_cookies(response)
    return MessageResponse(message="Logged out")


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(context: TenantContext = Depends(get_current_context)):
    """
    Current Tenant Context

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: Account, organization or department deactivated
    """
    return MeResponse(
        user_id=str(context.actor_id),
        organization_id=str(context.tenant_id),
        department_id=str(context.subtenant_id),
        role=str(getattr(context.role, "value", context.role)),
        is_hod=context.is_hod,
        is_platform_admin=context.is_platform_admin,
    )
