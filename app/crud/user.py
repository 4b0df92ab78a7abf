"""
CRUD operations for users and their job applications.

Password hashes never leave this module; every returned dict is
{username, firstName, lastName, email, isAdmin} (plus "jobs" from get).
"""

import logging
from typing import Any, Dict, List
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidInputError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.core.sql import bind, sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)

# API field -> column, for partial updates
USER_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
}


def _to_user(row) -> Dict[str, Any]:
    user = dict(row)
    user.pop("password", None)
    # SQLite hands booleans back as 0/1
    user["isAdmin"] = bool(user["isAdmin"])
    return user


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    row = db.execute(*bind(
        f"SELECT {USER_COLUMNS}, password FROM users WHERE username = $1",
        [username],
    )).mappings().first()

    if row and verify_password(password, row["password"]):
        return _to_user(row)

    logger.warning(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a user from {username, password, firstName, lastName, email, isAdmin}.

    Raises:
        InvalidInputError: If the username is taken
    """
    duplicate = db.execute(*bind(
        "SELECT username FROM users WHERE username = $1",
        [data["username"]],
    )).first()
    if duplicate:
        raise InvalidInputError(f"Duplicate username: {data['username']}")

    result = db.execute(*bind(
        f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}""",
        [
            data["username"],
            get_password_hash(data["password"]),
            data["firstName"],
            data["lastName"],
            data["email"],
            bool(data.get("isAdmin", False)),
        ],
    ))
    user = _to_user(result.mappings().one())
    db.commit()

    logger.info(f"Registered user {user['username']} (admin: {user['isAdmin']})")
    return user


def find_all(db: Session) -> List[Dict[str, Any]]:
    """List all users ordered by username."""
    result = db.execute(*bind(f"SELECT {USER_COLUMNS} FROM users ORDER BY username"))
    return [_to_user(row) for row in result.mappings()]


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Retrieve a user with "jobs": the ids of jobs applied to, ascending.

    Raises:
        NotFoundError: If no user has this username
    """
    row = db.execute(*bind(
        f"SELECT {USER_COLUMNS} FROM users WHERE username = $1",
        [username],
    )).mappings().first()

    if not row:
        raise NotFoundError(f"No user: {username}")

    user = _to_user(row)
    applied = db.execute(*bind(
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        [username],
    )).scalars()
    user["jobs"] = list(applied)

    return user


def update(db: Session, username: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update some of {firstName, lastName, password, email}.

    A new password is hashed before it is stored.

    Raises:
        InvalidInputError: If data is empty
        NotFoundError: If no user has this username
    """
    data = dict(data)
    if "password" in data:
        data["password"] = get_password_hash(data["password"])

    partial = sql_for_partial_update(data, USER_FIELDS)
    username_idx = len(partial.values) + 1

    row = db.execute(*bind(
        f"""UPDATE users
            SET {partial.set_clause}
            WHERE username = ${username_idx}
            RETURNING {USER_COLUMNS}""",
        partial.values + [username],
    )).mappings().first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    user = _to_user(row)
    db.commit()

    logger.info(f"Updated user {username}: {', '.join(data)}")
    return user


def remove(db: Session, username: str) -> None:
    """
    Delete a user; their applications go with them.

    Raises:
        NotFoundError: If no user has this username
    """
    row = db.execute(*bind(
        "DELETE FROM users WHERE username = $1 RETURNING username",
        [username],
    )).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: If the job or the user does not exist
        InvalidInputError: If the user already applied to this job
    """
    job = db.execute(*bind("SELECT id FROM jobs WHERE id = $1", [job_id])).first()
    if not job:
        raise NotFoundError(f"No job: {job_id}")

    user = db.execute(*bind("SELECT username FROM users WHERE username = $1", [username])).first()
    if not user:
        raise NotFoundError(f"No user: {username}")

    existing = db.execute(*bind(
        "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2",
        [username, job_id],
    )).first()
    if existing:
        raise InvalidInputError(f"Already applied to job: {job_id}")

    db.execute(*bind(
        "INSERT INTO applications (username, job_id) VALUES ($1, $2)",
        [username, job_id],
    ))
    db.commit()

    logger.info(f"User {username} applied to job {job_id}")
