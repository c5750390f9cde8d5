"""
Organization Use Cases

Platform administration of customer organizations.
"""

from .get_organization_use_case import GetOrganizationUseCase
from .list_organizations_use_case import ListOrganizationsUseCase, OrganizationStatisticsUseCase
from .manage_organization_use_cases import CreateOrganizationUseCase, UpdateOrganizationUseCase
from .organization_lifecycle_use_cases import (
    DeleteOrganizationUseCase,
    HardDeleteOrganizationUseCase,
    RestoreOrganizationUseCase,
)

__all__ = [
    "ListOrganizationsUseCase",
    "OrganizationStatisticsUseCase",
    "GetOrganizationUseCase",
    "CreateOrganizationUseCase",
    "UpdateOrganizationUseCase",
    "DeleteOrganizationUseCase",
    "RestoreOrganizationUseCase",
    "HardDeleteOrganizationUseCase",
]
