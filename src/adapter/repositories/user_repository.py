from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.entity_repository import EntityRepository
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import HOD_ROLES, User


class UserRepository(EntityRepository[User], IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_by_email(self, organization_id: UUID, email: str) -> Optional[User]:
        """Get active user by email address within an organization"""
        stmt = select(User).where(User.organization_id == organization_id, User.email == email.lower())
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_department(self, department_id: UUID) -> List[User]:
        stmt = select(User).where(User.department_id == department_id).order_by(User.created_at)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_hods(self, department_id: UUID) -> List[User]:
        stmt = select(User).where(User.department_id == department_id, User.role.in_(list(HOD_ROLES)))
        result = await self.session.exec(stmt)
        return list(result.all())
