"""
Closed allowlists for user-supplied sort parameters.

Sort names never reach SQL as text: they select one of a fixed set of
column expressions, and anything unknown falls back to the default.
"""
from typing import List, Mapping, Optional

from sqlalchemy.sql.elements import ColumnElement


ASC = "asc"
DESC = "desc"


def normalize_order(order: Optional[str]) -> str:
    if isinstance(order, str) and order.strip().lower() == DESC:
        return DESC
    return ASC


def resolve_sort(allowed: Mapping[str, str], sort_by: Optional[str], default: str = "name") -> str:
    if isinstance(sort_by, str) and sort_by in allowed:
        return sort_by
    return default


def order_clauses(
    columns: Mapping[str, ColumnElement],
    sort_by: Optional[str],
    order: Optional[str],
    tiebreaker: ColumnElement,
    default: str = "name",
) -> List[ColumnElement]:
    """Build ORDER BY clauses: the chosen column, then ``tiebreaker`` ascending."""
    column = columns[resolve_sort(columns, sort_by, default)]
    primary = column.desc() if normalize_order(order) == DESC else column.asc()
    return [primary, tiebreaker.asc()]
