"""
Task Manager Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    HOD_ROLES,
    Action,
    ActivityStatus,
    AttachmentParent,
    CommentType,
    EntityKind,
    FileCategory,
    MaterialUnit,
    NotificationPriority,
    NotificationType,
    OrganizationSize,
    Permission,
    Role,
    ScopeLevel,
    TaskFrequency,
    TaskPriority,
    TaskStatus,
    TaskType,
    UserStatus,
)

# Export all entities
from .organization import Organization
from .department import Department
from .user import User
from .task import Task
from .task_activity import TaskActivity
from .task_comment import TaskComment
from .material import Material
from .vendor import Vendor
from .attachment import Attachment
from .notification import Notification
from .audit_event import AuditEvent

ENTITY_MODELS = {
    EntityKind.organization: Organization,
    EntityKind.department: Department,
    EntityKind.user: User,
    EntityKind.task: Task,
    EntityKind.task_activity: TaskActivity,
    EntityKind.task_comment: TaskComment,
    EntityKind.material: Material,
    EntityKind.vendor: Vendor,
    EntityKind.attachment: Attachment,
    EntityKind.notification: Notification,
}

__all__ = [
    # Enums
    "HOD_ROLES",
    "Action",
    "ActivityStatus",
    "AttachmentParent",
    "CommentType",
    "EntityKind",
    "FileCategory",
    "MaterialUnit",
    "NotificationPriority",
    "NotificationType",
    "OrganizationSize",
    "Permission",
    "Role",
    "ScopeLevel",
    "TaskFrequency",
    "TaskPriority",
    "TaskStatus",
    "TaskType",
    "UserStatus",
    # Entities
    "Organization",
    "Department",
    "User",
    "Task",
    "TaskActivity",
    "TaskComment",
    "Material",
    "Vendor",
    "Attachment",
    "Notification",
    "AuditEvent",
    "ENTITY_MODELS",
]
