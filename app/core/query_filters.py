"""
Validation of list-endpoint query parameters.

A QueryFilter is used as a FastAPI dependency on GET list routes. It checks
the raw query string against an allowlist and per-field rules, collects every
violation, and either returns the normalized filters or raises a single
InvalidInputError describing all of them.

Usage:
    @router.get("/")
    def list_jobs(filters: dict = Depends(job_filters), db: Session = Depends(get_db)):
        ...
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from fastapi import Request

from app.core.exceptions import InvalidInputError
from app.core.sql import INT_MAX

TEXT = "text"
INT = "int"
BOOL = "bool"


@dataclass(frozen=True)
class FilterRule:
    """One allowed query key, its kind, and the key it normalizes to."""
    name: str
    kind: str = TEXT
    target: Optional[str] = None

    @property
    def key(self) -> str:
        return self.target or self.name


class QueryFilter:
    """
    Allowlist validator for query parameters.

    Args:
        rules: Allowed keys and how to parse them
        ranges: (min_name, max_name) pairs that must satisfy min <= max
            when both are present
    """

    def __init__(self, rules: Sequence[FilterRule], ranges: Sequence[Tuple[str, str]] = ()):
        self.rules = {rule.name: rule for rule in rules}
        self.ranges = list(ranges)

    def validate(self, query: Mapping[str, str]) -> Dict[str, Any]:
        errors: List[str] = []
        parsed: Dict[str, Any] = {}

        for key in query.keys():
            if key not in self.rules:
                errors.append(f"Invalid field: {key}")

        for name, rule in self.rules.items():
            raw = query.get(name)
            if raw is None:
                continue

            if rule.kind == BOOL:
                if raw not in ("true", "false"):
                    errors.append(f"{name} must be 'true' or 'false'")
                else:
                    parsed[name] = raw == "true"
                continue

            # An empty value is the same as leaving the filter off
            if raw == "":
                continue

            if rule.kind == INT:
                # Plain ASCII digits that fit an INTEGER column
                if raw.isascii() and raw.isdigit() and len(raw) <= 10 and int(raw) <= INT_MAX:
                    parsed[name] = int(raw)
                else:
                    errors.append(f"{name} must be a number")
            else:
                parsed[name] = raw

        for low, high in self.ranges:
            if low in parsed and high in parsed and parsed[low] > parsed[high]:
                errors.append(f"{low} cannot be greater than {high}")

        if errors:
            raise InvalidInputError(", ".join(errors))

        return {self.rules[name].key: value for name, value in parsed.items()}

    def __call__(self, request: Request) -> Dict[str, Any]:
        return self.validate(request.query_params)


company_filters = QueryFilter(
    rules=[
        FilterRule("name"),
        FilterRule("minEmployees", INT, "min_employees"),
        FilterRule("maxEmployees", INT, "max_employees"),
    ],
    ranges=[("minEmployees", "maxEmployees")],
)

job_filters = QueryFilter(
    rules=[
        FilterRule("title"),
        FilterRule("minSalary", INT, "min_salary"),
        FilterRule("hasEquity", BOOL, "has_equity"),
    ],
)
