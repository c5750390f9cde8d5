from fastapi import status
from src.libs.result import Error

# Error code -> HTTP status for errors the caller can act on
ERROR_STATUS = {
    "UNAUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "INVALID_REFRESH_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_DEACTIVATED": status.HTTP_403_FORBIDDEN,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "HARD_DELETE_DISABLED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "ALREADY_DELETED": status.HTTP_409_CONFLICT,
    "NOT_DELETED": status.HTTP_409_CONFLICT,
    "RESTORE_CONFLICT": status.HTTP_409_CONFLICT,
    "DUPLICATE_ENTRY": status.HTTP_409_CONFLICT,
    "ORGANIZATION_SELECTION_REQUIRED": status.HTTP_409_CONFLICT,
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "REFERENTIAL_INTEGRITY_VIOLATION": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_ROUTINE_TASK_STATUS": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_ROUTINE_TASK_PRIORITY": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_STATUS_TRANSITION": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "STORE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error) -> None:
    """Raise the API exception matching a use case error"""
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
