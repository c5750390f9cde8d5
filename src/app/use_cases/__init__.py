"""
Use Cases

Organized by domain folder:
- auth/: Registration, login, token refresh, logout
- users/: Tenant context loading and presence status
- resources/: CRUD and lifecycle of tenant-owned records
- organizations/: Platform administration of organizations
- maintenance/: Scheduled purge of expired tombstones
"""

from .auth import (
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterUseCase,
)
from .users import (
    GetStatusUseCase,
    LoadContextUseCase,
    MarkInactiveAwayUseCase,
    UpdateStatusUseCase,
)
from .maintenance import PurgeExpiredUseCase

__all__ = [
    # Auth
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    "RegisterUseCase",
    # Users
    "LoadContextUseCase",
    "UpdateStatusUseCase",
    "GetStatusUseCase",
    "MarkInactiveAwayUseCase",
    # Maintenance
    "PurgeExpiredUseCase",
]
