"""Query Pagination — applies page and cursor pagination to SQLAlchemy selects.

Invariants:
    - Cursor filter is the lexicographic "strictly after" predicate over the order columns,
      honoring each column's own direction:
      (c1 > v1) OR (c1 = v1 AND c2 > v2) OR ...   (">" becomes "<" for DESC columns)
    - A cursor missing a value for any order field is rejected, as is one whose
      value is not a scalar of the column's type (bool and null included)
    - next cursor is built from the last row of the page (None when the page is empty)
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select, and_, or_
from sqlalchemy.orm import InstrumentedAttribute

from movie_catalog.core.domain_types import SortDirection
from movie_catalog.core.errors import BadRequestError
from movie_catalog.core.pagination import (
    OrderItem, build_next_cursor, decode_cursor, resolve_order,
)


@dataclass
class CursorPaginationParams:
    cursor: str | None = None
    order: list[str] = field(default_factory=lambda: ["id_DESC"])
    take: int = 2


@dataclass
class PagePaginationParams:
    page: int = 1
    take: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.take


def apply_page_pagination(query: Select, params: PagePaginationParams) -> Select:
    return query.offset(params.offset).limit(params.take)


def _valid_cursor_value(column: InstrumentedAttribute, value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    if not isinstance(value, (int, float, str)):
        return False
    expected = column.type.python_type
    if expected is float:
        return isinstance(value, (int, float))
    return isinstance(value, expected)


def _after(column: InstrumentedAttribute, direction: SortDirection, value: Any):
    return column < value if direction is SortDirection.DESC else column > value


def _cursor_predicate(
    order: list[OrderItem],
    columns: Mapping[str, InstrumentedAttribute],
    values: Mapping[str, Any],
):
    clauses = []
    for i, item in enumerate(order):
        equal_prefix = [
            columns[prev.field] == values[prev.field] for prev in order[:i]
        ]
        clauses.append(and_(
            *equal_prefix,
            _after(columns[item.field], item.direction, values[item.field]),
        ))
    return or_(*clauses)


def apply_cursor_pagination(
    query: Select,
    params: CursorPaginationParams,
    columns: Mapping[str, InstrumentedAttribute],
) -> tuple[Select, list[OrderItem]]:
    """Return the paginated query and the resolved order (needed for next cursor)."""
    raw_order = params.order
    cursor_values: dict[str, Any] | None = None
    if params.cursor:
        state = decode_cursor(params.cursor)
        raw_order = state.order
        cursor_values = state.values

    order = resolve_order(raw_order, columns.keys())

    if cursor_values is not None:
        if any(
            item.field not in cursor_values
            or not _valid_cursor_value(columns[item.field], cursor_values[item.field])
            for item in order
        ):
            raise BadRequestError("Invalid cursor", "INVALID_CURSOR")
        query = query.where(_cursor_predicate(order, columns, cursor_values))

    for item in order:
        column = columns[item.field]
        query = query.order_by(
            column.desc() if item.direction is SortDirection.DESC else column.asc(),
        )
    return query.limit(params.take), order


def next_cursor_for(
    rows: Sequence[Any],
    order: list[OrderItem],
    columns: Mapping[str, InstrumentedAttribute],
) -> str | None:
    if not rows:
        return None
    last = rows[-1]
    values = {item.field: getattr(last, columns[item.field].key) for item in order}
    return build_next_cursor(values, order)
