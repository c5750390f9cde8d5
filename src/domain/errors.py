"""
Lifecycle and integrity errors raised by the soft-delete machinery.

Each carries the error code use cases hand back in their `Result`.
"""


class LifecycleError(Exception):
    code = "LIFECYCLE_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AlreadyDeleted(LifecycleError):
    code = "ALREADY_DELETED"


class NotDeleted(LifecycleError):
    code = "NOT_DELETED"


class RestoreConflict(LifecycleError):
    code = "RESTORE_CONFLICT"

    def __init__(self, message: str, fields: tuple = ()):
        self.fields = fields
        super().__init__(message)


class HardDeleteDisabled(LifecycleError):
    code = "HARD_DELETE_DISABLED"


class ReferentialIntegrityViolation(LifecycleError):
    code = "REFERENTIAL_INTEGRITY_VIOLATION"


class DuplicateEntry(LifecycleError):
    code = "DUPLICATE_ENTRY"

    def __init__(self, message: str, fields: tuple = ()):
        self.fields = fields
        super().__init__(message)
