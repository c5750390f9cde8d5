"""Account standing checks shared by login, refresh and context loading."""

from typing import Optional

from src.libs.result import Error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User


async def deactivation_error(uow: UnitOfWork, user: Optional[User]) -> Optional[Error]:
    """ACCOUNT_DEACTIVATED when the user, its organization or its department is gone"""
    if user is None or user.is_deleted:
        return Error("ACCOUNT_DEACTIVATED", "User account is deactivated")

    organization = await uow.organizations.get_by_id(user.organization_id, include_deleted=True)
    if organization is None or organization.is_deleted:
        return Error("ACCOUNT_DEACTIVATED", "User account is deactivated", reason="organization")

    department = await uow.departments.get_by_id(user.department_id, include_deleted=True)
    if department is None or department.is_deleted:
        return Error("ACCOUNT_DEACTIVATED", "User account is deactivated", reason="department")

    return None
