"""
Task Manager Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class Role(str, Enum):
    """Actor role, highest privilege first"""

    super_admin = "SuperAdmin"
    admin = "Admin"
    manager = "Manager"
    user = "User"


HOD_ROLES = (Role.super_admin, Role.admin)


class UserStatus(str, Enum):
    """Presence status"""

    online = "online"
    offline = "offline"
    away = "away"


class OrganizationSize(str, Enum):
    small = "Small"
    medium = "Medium"
    large = "Large"
    enterprise = "Enterprise"


class TaskType(str, Enum):
    """Task variant discriminator"""

    routine = "RoutineTask"
    assigned = "AssignedTask"
    project = "ProjectTask"


class TaskStatus(str, Enum):
    to_do = "To Do"
    in_progress = "In Progress"
    completed = "Completed"
    on_hold = "On Hold"


class TaskPriority(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"
    critical = "Critical"


class TaskFrequency(str, Enum):
    daily = "Daily"
    weekly = "Weekly"
    monthly = "Monthly"


class ActivityStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class CommentType(str, Enum):
    general = "general"
    status_update = "status_update"
    question = "question"
    feedback = "feedback"
    system = "system"


class AttachmentParent(str, Enum):
    """Kinds an attachment can hang off"""

    task = "Task"
    task_activity = "TaskActivity"
    task_comment = "TaskComment"


class FileCategory(str, Enum):
    image = "image"
    document = "document"
    video = "video"
    audio = "audio"
    other = "other"


class MaterialUnit(str, Enum):
    piece = "piece"
    kg = "kg"
    liter = "liter"
    meter = "meter"
    box = "box"
    pack = "pack"
    bottle = "bottle"
    bag = "bag"
    roll = "roll"
    sheet = "sheet"


class NotificationType(str, Enum):
    task_assigned = "task_assigned"
    task_updated = "task_updated"
    task_completed = "task_completed"
    task_overdue = "task_overdue"
    comment_added = "comment_added"
    mention = "mention"
    activity_added = "activity_added"
    user_joined = "user_joined"
    system_alert = "system_alert"
    reminder = "reminder"


class NotificationPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class EntityKind(str, Enum):
    """Every tombstone-bearing collection"""

    organization = "Organization"
    department = "Department"
    user = "User"
    task = "Task"
    task_activity = "TaskActivity"
    task_comment = "TaskComment"
    material = "Material"
    vendor = "Vendor"
    attachment = "Attachment"
    notification = "Notification"


class ScopeLevel(str, Enum):
    """Relationship between an acting user and a target"""

    own = "own"
    own_dept = "ownDept"
    cross_dept = "crossDept"
    cross_org = "crossOrg"


class Action(str, Enum):
    create = "create"
    read = "read"
    update = "update"
    delete = "delete"
    restore = "restore"


class Permission(str, Enum):
    """Coarse permission bucket granted per scope level"""

    read = "read"
    write = "write"
    delete = "delete"
