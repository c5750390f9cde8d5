"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Role, User, UserStatus


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Register an organization with its first department and SuperAdmin"""

    organization_name: str
    organization_email: str
    organization_phone: str
    organization_address: str
    organization_industry: str
    organization_size: str = "Small"
    organization_description: Optional[str] = None
    department_name: str
    department_description: Optional[str] = None
    first_name: str
    last_name: str
    email: str
    password: str
    position: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User information in authentication responses"""

    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    position: str
    status: str
    organization_id: str
    department_id: str


class LoginResponse(BaseModel):
    """Tokens travel as cookies; the route strips them from the body"""

    access_token: str
    refresh_token: str
    user: UserInfo


class RefreshTokenResponse(BaseModel):
    access_token: str
    refresh_token: str


class RegisterResponse(BaseModel):
    access_token: str
    refresh_token: str
    user: UserInfo
    organization_id: str
    department_id: str


def user_info(user: User) -> UserInfo:
    return UserInfo(
        id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=Role(user.role).value,
        position=user.position,
        status=UserStatus(user.status).value,
        organization_id=str(user.organization_id),
        department_id=str(user.department_id),
    )
