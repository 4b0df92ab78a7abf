import logging
from typing import Any, Dict
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import Identity, require_admin
from app.core.query_filters import job_filters
from app.core.sql import INT_MAX
from app.crud import job as job_crud
from app.schemas.common import DeletedResponse
from app.schemas.job import JobCreateRequest, JobEnvelope, JobListEnvelope, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin)
):
    """
    Create a job posting.

    Body: { title, salary, equity, companyHandle }

    Authorization required: admin
    """
    job = job_crud.create(db, request.to_data())
    return {"job": job}


@router.get("", response_model=JobListEnvelope)
def list_jobs(
    filters: Dict[str, Any] = Depends(job_filters),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Query parameters (all optional, combined with AND):
    - title: case-insensitive substring of the title
    - minSalary: minimum salary
    - hasEquity: "true" for jobs offering equity > 0

    Any other parameter is rejected with 400.
    """
    return {"jobs": job_crud.find_all(db, **filters)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int = Path(..., ge=1, le=INT_MAX), db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    request: JobUpdateRequest,
    job_id: int = Path(..., ge=1, le=INT_MAX),
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin)
):
    """
    Update some of { title, salary, equity }.

    Authorization required: admin
    """
    return {"job": job_crud.update(db, job_id, request.to_data())}


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(
    job_id: int = Path(..., ge=1, le=INT_MAX),
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin)
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": str(job_id)}
