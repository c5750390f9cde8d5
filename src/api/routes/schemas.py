"""
Request payloads for the resource routers.

Create models carry what a client may set; update models make every field
optional and only fields present in the request are applied.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.domain.entities import (
    ActivityStatus,
    AttachmentParent,
    CommentType,
    EntityKind,
    FileCategory,
    MaterialUnit,
    NotificationPriority,
    NotificationType,
    OrganizationSize,
    Role,
    TaskPriority,
    TaskStatus,
    TaskType,
)


class OrganizationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=20)
    address: str = Field(..., min_length=1, max_length=200)
    size: OrganizationSize = OrganizationSize.small
    industry: str = Field(..., min_length=1, max_length=100)
    logo: Optional[str] = Field(default=None, max_length=500)


class OrganizationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=1, max_length=20)
    address: Optional[str] = Field(default=None, min_length=1, max_length=200)
    size: Optional[OrganizationSize] = None
    industry: Optional[str] = Field(default=None, min_length=1, max_length=100)
    logo: Optional[str] = Field(default=None, max_length=500)


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    organization_id: Optional[UUID] = None


class DepartmentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class UserCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: Role = Role.user
    position: str = Field(..., min_length=1, max_length=100)
    profile_picture: Optional[str] = Field(default=None, max_length=500)
    department_id: Optional[UUID] = None
    organization_id: Optional[UUID] = None


class UserUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8)
    role: Optional[Role] = None
    position: Optional[str] = Field(default=None, min_length=1, max_length=100)
    profile_picture: Optional[str] = Field(default=None, max_length=500)
    department_id: Optional[UUID] = None


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    task_type: TaskType
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    department_id: Optional[UUID] = None
    organization_id: Optional[UUID] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    details: Optional[Dict[str, Any]] = None
    department_id: Optional[UUID] = None


class TaskActivityCreate(BaseModel):
    task_id: UUID
    description: str = Field(..., min_length=1, max_length=1000)
    status: ActivityStatus = ActivityStatus.pending
    notes: Optional[str] = Field(default=None, max_length=1000)
    assigned_to: Optional[UUID] = None


class TaskActivityUpdate(BaseModel):
    description: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    status: Optional[ActivityStatus] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
    assigned_to: Optional[UUID] = None


class TaskCommentCreate(BaseModel):
    task_id: UUID
    content: str = Field(..., min_length=1, max_length=2000)
    comment_type: CommentType = CommentType.general
    mentions: List[str] = Field(default_factory=list)
    parent_comment_id: Optional[UUID] = None


class TaskCommentUpdate(BaseModel):
    content: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    comment_type: Optional[CommentType] = None
    mentions: Optional[List[str]] = None


class MaterialCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category: str = Field(..., min_length=1, max_length=50)
    unit: MaterialUnit = MaterialUnit.piece
    unit_price: float = Field(default=0, ge=0)
    organization_id: Optional[UUID] = None


class MaterialUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category: Optional[str] = Field(default=None, min_length=1, max_length=50)
    unit: Optional[MaterialUnit] = None
    unit_price: Optional[float] = Field(default=None, ge=0)


class VendorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    contact_person: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=20)
    address: Optional[str] = Field(default=None, max_length=200)
    service_categories: List[str] = Field(default_factory=list)
    rating: int = Field(default=3, ge=1, le=5)
    organization_id: Optional[UUID] = None


class VendorUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    contact_person: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=1, max_length=20)
    address: Optional[str] = Field(default=None, max_length=200)
    service_categories: Optional[List[str]] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class AttachmentCreate(BaseModel):
    filename: str = Field(..., min_length=1, max_length=255)
    original_name: str = Field(..., min_length=1, max_length=255)
    mime_type: str = Field(..., min_length=1, max_length=100)
    file_size: int = Field(..., gt=0)
    url: str = Field(..., min_length=1, max_length=500)
    storage_key: str = Field(..., min_length=1, max_length=255)
    file_category: FileCategory = FileCategory.other
    description: Optional[str] = Field(default=None, max_length=500)
    attached_to: UUID
    attached_to_kind: AttachmentParent


class AttachmentUpdate(BaseModel):
    original_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=500)
    file_category: Optional[FileCategory] = None


class NotificationCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=1000)
    type: NotificationType
    priority: NotificationPriority = NotificationPriority.medium
    recipient_id: UUID
    related_entity_id: Optional[UUID] = None
    related_entity_kind: Optional[EntityKind] = None
    organization_id: Optional[UUID] = None


class NotificationUpdate(BaseModel):
    is_read: Optional[bool] = None
