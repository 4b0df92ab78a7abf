"""
Helpers for building parameterized SQL fragments.

Fragments use PostgreSQL-style positional placeholders ($1, $2, ...) so a
caller can read off which value lands where. `bind` turns a finished
statement into a SQLAlchemy TextClause with named parameters for execution.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from app.core.exceptions import InvalidInputError

_PLACEHOLDER = re.compile(r"\$(\d+)")

# Largest value an INTEGER (int4) column holds
INT_MAX = 2_147_483_647


@dataclass
class PartialUpdate:
    """A SET clause and the values for its placeholders, in order."""
    set_clause: str
    values: List[Any] = field(default_factory=list)


@dataclass
class WhereClause:
    """A WHERE clause (empty string when unfiltered) and its values."""
    where_clause: str
    values: List[Any] = field(default_factory=list)


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None
) -> PartialUpdate:
    """
    Build the SET clause of an UPDATE touching only the supplied fields.

    Args:
        data: Field name -> new value, in the order the columns should appear
        js_to_sql: Optional field name -> column name translation; fields not
            listed use their own name as the column

    Returns:
        PartialUpdate, e.g. for ({"firstName": "Aliya", "age": 32},
        {"firstName": "first_name"}):
            set_clause='"first_name"=$1, "age"=$2', values=["Aliya", 32]

    Raises:
        InvalidInputError: If there is nothing to update
    """
    if not data:
        raise InvalidInputError("No data")

    js_to_sql = js_to_sql or {}
    cols = [
        f'"{js_to_sql.get(name, name)}"=${idx}'
        for idx, name in enumerate(data, start=1)
    ]

    return PartialUpdate(set_clause=", ".join(cols), values=list(data.values()))


def sql_for_filters(predicates: Sequence[Tuple[str, Any]], start: int = 1) -> WhereClause:
    """
    Join filter predicates into a WHERE clause.

    Each predicate is a template with a single "{}" where its placeholder
    goes, paired with the value to bind, e.g. ("salary >= {}", 150000).
    Placeholders are numbered from `start` in the order given and the
    predicates are ANDed together.
    """
    if not predicates:
        return WhereClause(where_clause="", values=[])

    parts = []
    values = []
    for idx, (template, value) in enumerate(predicates, start=start):
        parts.append(template.format(f"${idx}"))
        values.append(value)

    return WhereClause(where_clause="WHERE " + " AND ".join(parts), values=values)


def bind(sql: str, values: Sequence[Any] = ()) -> Tuple[TextClause, Dict[str, Any]]:
    """
    Convert a $n-numbered statement into an executable TextClause.

    $1 becomes :p1 and so on; the returned params dict maps each name to the
    value at that position in `values`.
    """
    params = {}

    def _rename(match: "re.Match[str]") -> str:
        position = int(match.group(1))
        if position < 1 or position > len(values):
            raise ValueError(f"Placeholder ${position} has no value ({len(values)} supplied)")
        params[f"p{position}"] = values[position - 1]
        return f":p{position}"

    statement = _PLACEHOLDER.sub(_rename, sql)
    return text(statement), params


def contains_pattern(term: str) -> str:
    """
    LIKE pattern matching `term` anywhere, case-folded.

    Use with `lower(<col>) LIKE $n ESCAPE '\\'`; wildcard characters in the
    term are escaped so they match literally.
    """
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
