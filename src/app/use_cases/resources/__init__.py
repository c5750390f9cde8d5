"""
Resource Use Cases

CRUD and lifecycle operations shared by every tenant-owned kind.
"""

from .create_resource_use_case import CreateResourceUseCase
from .delete_resource_use_case import DeleteResourceUseCase
from .get_resource_use_case import GetResourceUseCase
from .list_related_use_case import ListRelatedUseCase
from .list_resources_use_case import ListResourcesUseCase
from .restore_resource_use_case import RestoreResourceUseCase
from .update_resource_use_case import UpdateResourceUseCase
from .dtos import PaginatedResponse, PaginationInfo

__all__ = [
    "CreateResourceUseCase",
    "DeleteResourceUseCase",
    "GetResourceUseCase",
    "ListRelatedUseCase",
    "ListResourcesUseCase",
    "RestoreResourceUseCase",
    "UpdateResourceUseCase",
    "PaginatedResponse",
    "PaginationInfo",
]
