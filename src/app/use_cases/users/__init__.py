"""
User Use Cases

Tenant context loading and presence status.
"""

from .load_context_use_case import LoadContextUseCase
from .status_use_cases import (
    GetStatusUseCase,
    MarkInactiveAwayUseCase,
    UpdateStatusUseCase,
)

__all__ = [
    "LoadContextUseCase",
    "UpdateStatusUseCase",
    "GetStatusUseCase",
    "MarkInactiveAwayUseCase",
]
