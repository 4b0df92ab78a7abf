"""
CRUD operations for companies.

Rows are returned as dicts keyed by the API's field names
(handle, name, description, numEmployees, logoUrl).
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidInputError, NotFoundError
from app.core.sql import bind, contains_pattern, sql_for_filters, sql_for_partial_update
from app.crud.job import format_equity

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'

# API field -> column, for partial updates
COMPANY_FIELDS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def _check_name_free(db: Session, name: str, handle: Optional[str] = None) -> None:
    """Raise InvalidInputError if a company other than `handle` is called `name`."""
    taken = db.execute(*bind(
        "SELECT handle FROM companies WHERE name = $1",
        [name],
    )).first()
    if taken and taken.handle != handle:
        raise InvalidInputError(f"Duplicate company name: {name}")


def create(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a company from {handle, name, description, numEmployees, logoUrl}.

    Raises:
        InvalidInputError: If the handle or the name is already taken
    """
    duplicate = db.execute(*bind(
        "SELECT handle FROM companies WHERE handle = $1",
        [data["handle"]],
    )).first()
    if duplicate:
        raise InvalidInputError(f"Duplicate company: {data['handle']}")
    _check_name_free(db, data["name"])

    result = db.execute(*bind(
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
        [
            data["handle"],
            data["name"],
            data["description"],
            data.get("numEmployees"),
            data.get("logoUrl"),
        ],
    ))
    company = dict(result.mappings().one())
    db.commit()

    logger.info(f"Created company {company['handle']}")
    return company


def find_all(
    db: Session,
    name: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    List companies, optionally filtered. Filters combine with AND.

    Args:
        db: Database session
        name: Case-insensitive substring of the company name
        min_employees: At least this many employees
        max_employees: At most this many employees

    Returns:
        Matching companies ordered by handle

    Raises:
        InvalidInputError: If min_employees > max_employees
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise InvalidInputError("minEmployees cannot be greater than maxEmployees")

    predicates = []
    if name:
        predicates.append(("lower(name) LIKE {} ESCAPE '\\'", contains_pattern(name)))
    if min_employees is not None:
        predicates.append(("num_employees >= {}", min_employees))
    if max_employees is not None:
        predicates.append(("num_employees <= {}", max_employees))

    where = sql_for_filters(predicates)
    result = db.execute(*bind(
        f"SELECT {COMPANY_COLUMNS} FROM companies {where.where_clause} ORDER BY handle",
        where.values,
    ))
    return [dict(row) for row in result.mappings()]


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company and its jobs.

    Returns:
        Company dict with "jobs": [{id, title, salary, equity}, ...] by id

    Raises:
        NotFoundError: If no company has this handle
    """
    row = db.execute(*bind(
        f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1",
        [handle],
    )).mappings().first()

    if not row:
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    jobs = db.execute(*bind(
        "SELECT id, title, salary, equity FROM jobs WHERE company_handle = $1 ORDER BY id",
        [handle],
    )).mappings()
    company["jobs"] = [
        {**job, "equity": format_equity(job["equity"])} for job in jobs
    ]

    return company


def update(db: Session, handle: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update some of {name, description, numEmployees, logoUrl}.

    Raises:
        InvalidInputError: If data is empty or the new name is taken
        NotFoundError: If no company has this handle
    """
    partial = sql_for_partial_update(data, COMPANY_FIELDS)
    if "name" in data:
        _check_name_free(db, data["name"], handle)

    handle_idx = len(partial.values) + 1

    row = db.execute(*bind(
        f"""UPDATE companies
            SET {partial.set_clause}
            WHERE handle = ${handle_idx}
            RETURNING {COMPANY_COLUMNS}""",
        partial.values + [handle],
    )).mappings().first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    db.commit()

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and, through the FK cascade, its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    row = db.execute(*bind(
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle],
    )).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
