"""
User Entity

An authenticated actor. Belongs to one organization and one department.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index

from src.domain.base import Entity

from .enums import HOD_ROLES, Role, UserStatus


class User(Entity, table=True):
    """
    User entity - an actor holding a role.

    Business Rules:
    - Email is unique per organization among active users
    - The department must belong to the user's organization
    - SuperAdmin/Admin (HOD) users hold a position unique among the active
      HODs of their department
    - Password stored as bcrypt hash (cost factor 12)
    - Refresh token stored as SHA-256 hash only
    """

    __tablename__ = "users"

    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: str = Field(max_length=255, index=True)
    password_hash: str = Field(max_length=60)

    role: Role = Field(default=Role.user)
    position: str = Field(max_length=100)
    profile_picture: Optional[str] = Field(default=None, max_length=500)
    status: UserStatus = Field(default=UserStatus.offline)

    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)
    department_id: UUID = Field(foreign_key="departments.id", nullable=False, index=True)

    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    refresh_token_hash: Optional[str] = Field(default=None, max_length=64)
    refresh_token_expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_org_email", "organization_id", "email"),
        Index("idx_user_dept_role", "department_id", "role"),
        Index("idx_user_dept_position", "department_id", "position"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_hod(self) -> bool:
        return self.role in HOD_ROLES
