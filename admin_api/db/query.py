"""
admin_api/db/query.py
---------------------
Filtered list queries with a paired COUNT.

A ``FilterSet`` collects predicate/parameter pairs from request arguments.
Every predicate is registered together with its bound value under a
generated parameter name, so the SQL text and the parameter mapping can
never disagree. A ``ListQuery`` renders the page query and the count query
from the same FROM/JOIN/WHERE text.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from admin_api.errors import ValidationError


class FilterSet:
    """Ordered collection of WHERE fragments and their bound values."""

    def __init__(self):
        self._clauses: list[str] = []
        self._params: dict[str, Any] = {}

    def _bind(self, value: Any) -> str:
        name = f"f{len(self._params)}"
        self._params[name] = value
        return f"%({name})s"

    def equals(self, column: str, value: Optional[Any]) -> "FilterSet":
        """Exact match; ``None`` and empty strings add nothing."""
        if value is None or value == "":
            return self
        self._clauses.append(f"{column} = {self._bind(value)}")
        return self

    def contains(self, columns: Sequence[str], value: Optional[str]) -> "FilterSet":
        """
        Case-insensitive substring match over one or more columns.

        The columns are OR-ed inside one parenthesised fragment and all of
        them reuse the same bound value.
        """
        if not value:
            return self
        placeholder = self._bind(f"%{value}%")
        matches = " OR ".join(f"{column} ILIKE {placeholder}" for column in columns)
        self._clauses.append(f"({matches})")
        return self

    def flag(self, column: str, raw: Optional[str]) -> "FilterSet":
        """Boolean filter from a query-string value: ``"true"`` or anything else."""
        if raw is None:
            return self
        self._clauses.append(f"{column} = {self._bind(raw == 'true')}")
        return self

    @property
    def clauses(self) -> list[str]:
        return list(self._clauses)

    @property
    def params(self) -> dict[str, Any]:
        return dict(self._params)

    def where_sql(self) -> str:
        """`` WHERE a AND b`` or an empty string when nothing was collected."""
        if not self._clauses:
            return ""
        return " WHERE " + " AND ".join(self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int = 0

    @classmethod
    def from_args(cls, args: Mapping[str, str], default_limit: int = 50) -> "Pagination":
        """
        Parse ``limit``/``offset`` query-string values.

        Raises:
            ValidationError: If either value is not a non-negative integer.
        """
        limit = _parse_int(args.get("limit"), default_limit, "limit")
        offset = _parse_int(args.get("offset"), 0, "offset")
        return cls(limit=limit, offset=offset)


def _parse_int(raw: Optional[str], default: int, name: str) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"'{name}' must be an integer")
    if value < 0:
        raise ValidationError(f"'{name}' must not be negative")
    return value


@dataclass
class Page:
    """One page of rows plus the size of the whole filtered set."""
    rows: list[dict]
    total: int
    limit: int
    offset: int


@dataclass(frozen=True)
class ListQuery:
    """
    Static parts of a list endpoint's query.

    Attributes:
        source: FROM target including any JOIN, e.g.
            ``orders o LEFT JOIN customers c ON o.customer_id = c.id``.
        order_by: ORDER BY expression.
        columns: Select list for the page query.
    """
    source: str
    order_by: str
    columns: str = "*"

    def page_sql(self, filters: FilterSet, page: Pagination) -> tuple[str, dict]:
        sql = (
            f"SELECT {self.columns} FROM {self.source}{filters.where_sql()}"
            f" ORDER BY {self.order_by} LIMIT %(limit)s OFFSET %(offset)s;"
        )
        params = filters.params
        params["limit"] = page.limit
        params["offset"] = page.offset
        return sql, params

    def count_sql(self, filters: FilterSet) -> tuple[str, dict]:
        sql = f"SELECT COUNT(*) AS count FROM {self.source}{filters.where_sql()};"
        return sql, filters.params


def partial_update_sql(table: str, fields: Sequence[str]) -> str:
    """
    UPDATE statement where every omitted field keeps its stored value.

    Each column is written as ``COALESCE(%(col)s, col)``, so passing ``None``
    for a field leaves it untouched. The row id is bound as ``%(id)s``.
    """
    assignments = ",\n                ".join(
        f"{name} = COALESCE(%({name})s, {name})" for name in fields
    )
    return f"""
            UPDATE {table}
            SET {assignments},
                updated_at = NOW()
            WHERE id = %(id)s
            RETURNING *;
        """
