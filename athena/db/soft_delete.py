"""
软删除全局过滤

所有 ORM SELECT 自动对每张软删除表附加 deleted_at IS NULL。
需要看到已删除行时，在语句上设置执行选项 include_deleted=True。
"""

from typing import Iterator, Type

from sqlalchemy import event
from sqlalchemy.orm import ORMExecuteState, Session, with_loader_criteria

from athena.models.base import SoftDeleteModel

INCLUDE_DELETED = "include_deleted"


def soft_delete_tables() -> Iterator[Type[SoftDeleteModel]]:
    """
    遍历 SoftDeleteModel 的所有映射子类（table=True）

    SoftDeleteModel 本身没有表，不能直接作为过滤目标

    Returns:
        已映射到表的模型类
    """
    pending = list(SoftDeleteModel.__subclasses__())
    while pending:
        model = pending.pop()
        pending.extend(model.__subclasses__())
        if hasattr(model, "__table__"):
            yield model


@event.listens_for(Session, "do_orm_execute")
def _exclude_soft_deleted(execute_state: ORMExecuteState) -> None:
    if (
        execute_state.is_select
        and not execute_state.is_column_load
        and not execute_state.is_relationship_load
        and not execute_state.execution_options.get(INCLUDE_DELETED, False)
    ):
        statement = execute_state.statement
        for model in soft_delete_tables():
            statement = statement.options(
                with_loader_criteria(model, model.deleted_at.is_(None), include_aliases=True)
            )
        execute_state.statement = statement
