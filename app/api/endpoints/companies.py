"""
Company endpoints.

Anyone may read companies; creating, editing and deleting requires an admin.
"""

import logging
from typing import Any, Dict
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import Identity, require_admin
from app.core.query_filters import company_filters
from app.crud import company as company_crud
from app.schemas.common import DeletedResponse
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListEnvelope,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin)
):
    """
    Create a company.

    Body: { handle, name, description, numEmployees, logoUrl }
    """
    return {"company": company_crud.create(db, request.to_data())}


@router.get("", response_model=CompanyListEnvelope)
def list_companies(
    filters: Dict[str, Any] = Depends(company_filters),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered by name, minEmployees, maxEmployees.
    """
    return {"companies": company_crud.find_all(db, **filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company with its jobs: [{ id, title, salary, equity }, ...]."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin)
):
    """Update some of { name, description, numEmployees, logoUrl }."""
    return {"company": company_crud.update(db, handle, request.to_data())}


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin)
):
    """Delete a company and its jobs."""
    company_crud.remove(db, handle)
    return {"deleted": handle}
