"""Maintenance use cases run by the scheduler."""

from .purge_expired_use_case import PurgeExpiredUseCase

__all__ = ["PurgeExpiredUseCase"]
