"""Clause mixins composed into :class:`~sqlprep.builder.Sql`."""

from sqlprep.builder.mixins._execute import ExecuteMixin
from sqlprep.builder.mixins._insert_update import (
    CallMixin,
    DeleteMixin,
    InsertIntoMixin,
    SetClauseMixin,
    UpdateMixin,
    ValuesClauseMixin,
)
from sqlprep.builder.mixins._join import JoinClauseMixin
from sqlprep.builder.mixins._order_limit import GroupByClauseMixin, LimitOffsetClauseMixin, OrderByClauseMixin
from sqlprep.builder.mixins._select import SelectClauseMixin
from sqlprep.builder.mixins._where import HavingClauseMixin, WhereClauseMixin

__all__ = (
    "CallMixin",
    "DeleteMixin",
    "ExecuteMixin",
    "GroupByClauseMixin",
    "HavingClauseMixin",
    "InsertIntoMixin",
    "JoinClauseMixin",
    "LimitOffsetClauseMixin",
    "OrderByClauseMixin",
    "SelectClauseMixin",
    "SetClauseMixin",
    "UpdateMixin",
    "ValuesClauseMixin",
    "WhereClauseMixin",
)
