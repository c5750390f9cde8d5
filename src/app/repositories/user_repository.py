from abc import abstractmethod
from typing import List, Optional
from uuid import UUID

from src.app.repositories.entity_repository import IEntityRepository
from src.domain.entities import User


class IUserRepository(IEntityRepository[User]):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, organization_id: UUID, email: str) -> Optional[User]:
        """Get active user by email address within an organization"""
        pass

    @abstractmethod
    async def get_by_department(self, department_id: UUID) -> List[User]:
        """Active users of a department"""
        pass

    @abstractmethod
    async def get_hods(self, department_id: UUID) -> List[User]:
        """Active SuperAdmin/Admin users of a department"""
        pass
