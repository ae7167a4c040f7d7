"""
SQL assembly helpers for the CRUD layer.

Statements are written with PostgreSQL-style positional placeholders
($1, $2, ...) and executed through SQLAlchemy's bound parameters via
bind_positional(), so values never end up inside the SQL text.
"""

import re
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from sqlalchemy import text
from sqlalchemy.engine import CursorResult
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_PLACEHOLDER = re.compile(r"\$(\d+)")


class PartialUpdate(NamedTuple):
    set_cols: str
    values: List[Any]


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> PartialUpdate:
    """
    Build the SET clause of a partial UPDATE.

    Args:
        data_to_update: Field name -> new value, in the order to assign
        js_to_sql: Field name -> column name, for fields whose column
            name differs (e.g. {"firstName": "first_name"})

    Returns:
        PartialUpdate(set_cols, values), e.g. for
        ({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}):
        ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        BadRequestError: No data, or a column name that is not an identifier
    """
    keys = list(data_to_update.keys())
    if not keys:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    cols = []
    for idx, key in enumerate(keys, start=1):
        col_name = js_to_sql.get(key, key)
        if not _IDENTIFIER.match(col_name):
            raise BadRequestError(f"Invalid field: {key}")
        cols.append(f'"{col_name}"=${idx}')

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )


class WhereClause:
    """
    Accumulates optional filters for a list query.

    Each predicate is written with "{}" where its bound value goes; the
    placeholder number is assigned when the filter is added. Predicates
    added without a value are used literally.

        where = WhereClause()
        where.add("salary >= {}", 50000)
        where.add("equity > 0")
        where.sql     # 'WHERE salary >= $1 AND equity > 0'
        where.values  # [50000]
    """

    def __init__(self, start: int = 1):
        self._start = start
        self.filters: List[str] = []
        self.values: List[Any] = []

    def add(self, predicate: str, *values: Any) -> "WhereClause":
        placeholders = []
        for value in values:
            self.values.append(value)
            placeholders.append(f"${self._start + len(self.values) - 1}")
        self.filters.append(predicate.format(*placeholders))
        return self

    def __bool__(self) -> bool:
        return bool(self.filters)

    @property
    def sql(self) -> str:
        if not self.filters:
            return ""
        return "WHERE " + " AND ".join(self.filters)


def bind_positional(sql: str, values: List[Any]) -> Tuple[TextClause, Dict[str, Any]]:
    """
    Convert a $n-placeholder statement into a text() clause plus params.

    $1 becomes :p1 and so on; every placeholder must have a value.
    """
    def _named(match: "re.Match[str]") -> str:
        position = int(match.group(1))
        if position < 1 or position > len(values):
            raise ValueError(f"No value bound for placeholder ${position}")
        return f":p{position}"

    named_sql = _PLACEHOLDER.sub(_named, sql)
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return text(named_sql), params


def execute(db: Session, sql: str, values: Sequence[Any] = ()) -> CursorResult:
    """Run a $n-placeholder statement on the session."""
    return db.execute(*bind_positional(sql, list(values)))
