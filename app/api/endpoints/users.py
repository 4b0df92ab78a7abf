"""
User endpoints.

Listing and creating users is admin-only. Reading, editing, deleting a user
and applying to jobs is open to that user and to admins.
"""

import logging
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import Identity, require_admin, require_self_or_admin
from app.core.security import create_access_token
from app.core.sql import INT_MAX
from app.crud import user as user_crud
from app.schemas.common import DeletedResponse
from app.schemas.user import (
    AppliedResponse,
    UserCreateRequest,
    UserCreateResponse,
    UserDetailEnvelope,
    UserEnvelope,
    UserListEnvelope,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=UserCreateResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin)
):
    """
    Add a user, possibly another admin. This is not the signup endpoint;
    see POST /auth/register.

    Returns the new user and a token for them.
    """
    user = user_crud.register(db, request.to_data())
    logger.info(f"Admin {admin.username} created user {user['username']}")
    return {"user": user, "token": create_access_token(user["username"], user["isAdmin"])}


@router.get("", response_model=UserListEnvelope)
def list_users(
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin)
):
    """List all users."""
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_self_or_admin)
):
    """Retrieve a user with the ids of the jobs they applied to."""
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_self_or_admin)
):
    """Update some of { firstName, lastName, password, email }."""
    return {"user": user_crud.update(db, username, request.to_data())}


@router.delete("/{username}", response_model=DeletedResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_self_or_admin)
):
    """Delete a user account."""
    user_crud.remove(db, username)
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", status_code=201, response_model=AppliedResponse)
def apply_to_job(
    username: str,
    job_id: int = Path(..., ge=1, le=INT_MAX),
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_self_or_admin)
):
    """Apply the user to a job."""
    user_crud.apply_to_job(db, username, job_id)
    return {"applied": job_id}
