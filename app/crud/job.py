"""
CRUD operations for jobs.

Each function issues one or two parameterized SQL statements through the
session and returns plain dicts keyed by the API's field names
(id, title, salary, equity, companyHandle).
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.core.sql import bind, contains_pattern, sql_for_filters, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def format_equity(value: Any) -> Optional[str]:
    """
    Render a NUMERIC equity value as a plain decimal string ("0.05", "0").

    Drivers hand back Decimal (PostgreSQL) or float/int (SQLite); both are
    normalized to the same text.
    """
    if value is None:
        return None
    number = Decimal(str(value)).normalize()
    return format(number, "f")


def _to_job(row) -> Dict[str, Any]:
    job = dict(row)
    job["equity"] = format_equity(job["equity"])
    return job


def create(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a job from {title, salary, equity, companyHandle}.

    Raises:
        NotFoundError: If companyHandle names no company
    """
    company = db.execute(*bind(
        "SELECT handle FROM companies WHERE handle = $1",
        [data["companyHandle"]],
    )).first()
    if not company:
        raise NotFoundError(f"No company: {data['companyHandle']}")

    result = db.execute(*bind(
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [data["title"], data.get("salary"), data.get("equity"), data["companyHandle"]],
    ))
    job = _to_job(result.mappings().one())
    db.commit()

    logger.info(f"Created job {job['id']}: {job['title']} ({job['companyHandle']})")
    return job


def find_all(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None
) -> List[Dict[str, Any]]:
    """
    List jobs, optionally filtered. Filters combine with AND.

    Args:
        db: Database session
        title: Case-insensitive substring of the title
        min_salary: Only jobs paying at least this much
        has_equity: When True, only jobs with equity > 0; False means no filter

    Returns:
        Matching jobs ordered by id
    """
    predicates = []
    if title:
        predicates.append(("lower(title) LIKE {} ESCAPE '\\'", contains_pattern(title)))
    if min_salary is not None:
        predicates.append(("salary >= {}", min_salary))
    if has_equity:
        predicates.append(("equity > {}", 0))

    where = sql_for_filters(predicates)
    result = db.execute(*bind(
        f"SELECT {JOB_COLUMNS} FROM jobs {where.where_clause} ORDER BY id",
        where.values,
    ))
    return [_to_job(row) for row in result.mappings()]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no job has this id
    """
    row = db.execute(*bind(
        f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1",
        [job_id],
    )).mappings().first()

    if not row:
        raise NotFoundError(f"No job: {job_id}")

    return _to_job(row)


def update(db: Session, job_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update some of {title, salary, equity}. The id and company never change.

    Raises:
        InvalidInputError: If data is empty
        NotFoundError: If no job has this id
    """
    partial = sql_for_partial_update(data)
    id_idx = len(partial.values) + 1

    row = db.execute(*bind(
        f"""UPDATE jobs
            SET {partial.set_clause}
            WHERE id = ${id_idx}
            RETURNING {JOB_COLUMNS}""",
        partial.values + [job_id],
    )).mappings().first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    job = _to_job(row)
    db.commit()

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID. Applications to it are removed by the FK cascade.

    Raises:
        NotFoundError: If no job has this id
    """
    row = db.execute(*bind(
        "DELETE FROM jobs WHERE id = $1 RETURNING id",
        [job_id],
    )).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
