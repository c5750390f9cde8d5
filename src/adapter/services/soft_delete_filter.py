"""
Session-level tombstone handling.

Installed once on the ORM `Session` class, so every session (sync or the
sync half of an AsyncSession) gets it:
- SELECTs get `is_deleted IS NOT true` criteria for every tombstone-bearing
  entity, including joined and subquery occurrences
- ORM UPDATEs against a tombstone-bearing table are restricted the same way
- ORM DELETEs and flushes of deleted tombstone-bearing rows are refused
  unless hard delete has been enabled on the session or statement

A statement is left alone when it carries the `include_deleted` execution
option or already compares `is_deleted` somewhere in its WHERE clauses.
"""

import logging

from sqlalchemy import event
from sqlalchemy.orm import ORMExecuteState, Session, with_loader_criteria
from sqlalchemy.sql import visitors
from sqlalchemy.sql.elements import BinaryExpression, ColumnClause, UnaryExpression

from src.domain.base import TOMBSTONE_FIELD, Entity
from src.domain.errors import HardDeleteDisabled

logger = logging.getLogger(__name__)

INCLUDE_DELETED = "include_deleted"
ALLOW_HARD_DELETE = "allow_hard_delete"


def _is_tombstone_column(element) -> bool:
    return isinstance(element, ColumnClause) and element.key == TOMBSTONE_FIELD


def mentions_tombstone(statement) -> bool:
    """True when any comparison in the statement (subqueries included) targets is_deleted"""
    for element in visitors.iterate(statement):
        if isinstance(element, BinaryExpression):
            if _is_tombstone_column(element.left) or _is_tombstone_column(element.right):
                return True
        elif isinstance(element, UnaryExpression):
            if _is_tombstone_column(element.element):
                return True
    whereclause = getattr(statement, "whereclause", None)
    return whereclause is not None and _is_tombstone_column(whereclause)


def hard_delete_allowed(session: Session, options=None) -> bool:
    if session.info.get(ALLOW_HARD_DELETE):
        return True
    return bool(options and options.get(ALLOW_HARD_DELETE))


def tombstone_models():
    """Every mapped table carrying tombstone columns"""
    models, pending = [], list(Entity.__subclasses__())
    while pending:
        cls = pending.pop()
        pending.extend(cls.__subclasses__())
        if getattr(cls, "__table__", None) is not None:
            models.append(cls)
    return models


def _tombstone_mapper(orm_execute_state: ORMExecuteState):
    mapper = orm_execute_state.bind_mapper
    if mapper is not None and issubclass(mapper.class_, Entity):
        return mapper
    return None


@event.listens_for(Session, "do_orm_execute")
def _filter_tombstones(orm_execute_state: ORMExecuteState) -> None:
    options = orm_execute_state.execution_options

    if orm_execute_state.is_delete:
        if _tombstone_mapper(orm_execute_state) is not None and not hard_delete_allowed(
            orm_execute_state.session, options
        ):
            raise HardDeleteDisabled("Permanent deletion is disabled; use soft delete")
        return

    if options.get(INCLUDE_DELETED):
        return

    if orm_execute_state.is_select:
        if orm_execute_state.is_column_load or orm_execute_state.is_relationship_load:
            return
        if mentions_tombstone(orm_execute_state.statement):
            return
        statement = orm_execute_state.statement
        # Column-only and count selects name their table through the bind mapper
        mapper = _tombstone_mapper(orm_execute_state)
        if mapper is not None:
            statement = statement.where(mapper.class_.is_deleted.is_not(True))
        # Criteria must target mapped classes; the SQLModel base has no columns
        orm_execute_state.statement = statement.options(
            *(
                with_loader_criteria(model, lambda cls: cls.is_deleted.is_not(True), include_aliases=True)
                for model in tombstone_models()
            )
        )
        return

    if orm_execute_state.is_update:
        mapper = _tombstone_mapper(orm_execute_state)
        if mapper is None or mentions_tombstone(orm_execute_state.statement):
            return
        column = mapper.class_.is_deleted
        orm_execute_state.statement = orm_execute_state.statement.where(column.is_not(True))


@event.listens_for(Session, "before_flush")
def _guard_hard_delete(session: Session, flush_context, instances) -> None:
    if hard_delete_allowed(session):
        return
    for obj in session.deleted:
        if isinstance(obj, Entity):
            logger.warning(f"Refused hard delete of {type(obj).__name__} {obj.id}")
            raise HardDeleteDisabled(f"Permanent deletion of {type(obj).__name__} is disabled; use soft delete")
