"""
Soft-delete lifecycle configuration.

Declarative tables consumed by the generic cascade walker, the restore
conflict check and the purge sweep:
- CASCADE_EDGES: parent kind -> child records tombstoned with it
- UNIQUE_KEYS: per-kind keys that must be unique among active records
- RETENTION_DAYS: how long a tombstoned record is kept before purge
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Mapping, Optional, Tuple

from src.domain.entities import HOD_ROLES, AttachmentParent, EntityKind


@dataclass(frozen=True)
class CascadeEdge:
    target: EntityKind
    foreign_key: str
    propagate_actor: bool = True
    # Extra equality filters on the child, e.g. the attachment parent kind
    match: Mapping[str, Any] = field(default_factory=dict)


CASCADE_EDGES: Dict[EntityKind, Tuple[CascadeEdge, ...]] = {
    EntityKind.organization: (
        CascadeEdge(EntityKind.department, "organization_id"),
        CascadeEdge(EntityKind.user, "organization_id"),
        CascadeEdge(EntityKind.task, "organization_id"),
        CascadeEdge(EntityKind.material, "organization_id"),
        CascadeEdge(EntityKind.vendor, "organization_id"),
        CascadeEdge(EntityKind.notification, "organization_id"),
    ),
    EntityKind.department: (
        CascadeEdge(EntityKind.user, "department_id"),
        CascadeEdge(EntityKind.task, "department_id"),
    ),
    EntityKind.task: (
        CascadeEdge(EntityKind.task_activity, "task_id"),
        CascadeEdge(EntityKind.task_comment, "task_id"),
        CascadeEdge(
            EntityKind.attachment,
            "attached_to",
            match={"attached_to_kind": AttachmentParent.task},
        ),
    ),
    EntityKind.task_activity: (
        CascadeEdge(
            EntityKind.attachment,
            "attached_to",
            match={"attached_to_kind": AttachmentParent.task_activity},
        ),
    ),
    EntityKind.task_comment: (
        CascadeEdge(EntityKind.task_comment, "parent_comment_id"),
        CascadeEdge(
            EntityKind.attachment,
            "attached_to",
            match={"attached_to_kind": AttachmentParent.task_comment},
        ),
    ),
}


def parent_edges(kind: EntityKind) -> Tuple[Tuple[EntityKind, CascadeEdge], ...]:
    """Edges pointing at `kind`, as (parent kind, edge) pairs"""
    return tuple(
        (parent, edge)
        for parent, edges in CASCADE_EDGES.items()
        for edge in edges
        if edge.target == kind
    )


RETENTION_DAYS: Dict[EntityKind, int] = {
    EntityKind.organization: 365,
    EntityKind.department: 365,
    EntityKind.user: 365,
    EntityKind.task: 180,
    EntityKind.task_activity: 180,
    EntityKind.task_comment: 180,
    EntityKind.material: 180,
    EntityKind.vendor: 365,
    EntityKind.attachment: 90,
    EntityKind.notification: 30,
}

# Children before parents so foreign keys never dangle mid-sweep
PURGE_ORDER: Tuple[EntityKind, ...] = (
    EntityKind.attachment,
    EntityKind.notification,
    EntityKind.task_comment,
    EntityKind.task_activity,
    EntityKind.task,
    EntityKind.material,
    EntityKind.vendor,
    EntityKind.user,
    EntityKind.department,
    EntityKind.organization,
)


def retention_seconds(kind: EntityKind, overrides: Optional[Mapping[str, int]] = None) -> int:
    days = RETENTION_DAYS[kind]
    if overrides and kind.value in overrides:
        days = int(overrides[kind.value])
    return days * 24 * 60 * 60


def purge_cutoff(
    kind: EntityKind, now: datetime, overrides: Optional[Mapping[str, int]] = None
) -> datetime:
    """Tombstones with deleted_at before this instant are eligible for purge"""
    return now - timedelta(seconds=retention_seconds(kind, overrides))


@dataclass(frozen=True)
class UniqueKey:
    fields: Tuple[str, ...]
    # Key only applies to records whose field value is in the given set
    applies_when: Mapping[str, Tuple[Any, ...]] = field(default_factory=dict)
    normalize_case: bool = False

    def applies_to(self, record: Any) -> bool:
        for name, allowed in self.applies_when.items():
            if _value(record, name) not in allowed:
                return False
        return True

    def filters_for(self, record: Any) -> Dict[str, Any]:
        filters = {}
        for name in self.fields:
            value = _value(record, name)
            if self.normalize_case and isinstance(value, str):
                value = value.lower()
            filters[name] = value
        for name, allowed in self.applies_when.items():
            filters[name] = list(allowed)
        return filters


UNIQUE_KEYS: Dict[EntityKind, Tuple[UniqueKey, ...]] = {
    EntityKind.organization: (
        UniqueKey(("name",)),
        UniqueKey(("email",), normalize_case=True),
    ),
    EntityKind.department: (UniqueKey(("organization_id", "name")),),
    EntityKind.user: (
        UniqueKey(("organization_id", "email"), normalize_case=True),
        UniqueKey(("department_id", "position"), applies_when={"role": tuple(HOD_ROLES)}),
    ),
    EntityKind.material: (UniqueKey(("organization_id", "name")),),
    EntityKind.vendor: (UniqueKey(("organization_id", "name")),),
}


def _value(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)
