"""
Pydantic schemas for Company API requests/responses.
"""

from typing import List, Optional
from pydantic import Field, StrictInt
from app.core.sql import INT_MAX
from app.schemas.common import ApiModel, ApiRequest
from app.schemas.job import JobSummary


class CompanyCreateRequest(ApiRequest):
    """Schema for creating a company"""
    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9_-]+$")
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[StrictInt] = Field(None, ge=0, le=INT_MAX)
    logo_url: Optional[str] = None


class CompanyUpdateRequest(ApiRequest):
    """Schema for a partial company update; the handle cannot change"""
    name: str = Field(None, min_length=1)
    description: str = None
    num_employees: Optional[StrictInt] = Field(None, ge=0, le=INT_MAX)
    logo_url: Optional[str] = None


class CompanyResponse(ApiModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetailResponse(CompanyResponse):
    """Company with the jobs it has posted"""
    jobs: List[JobSummary] = []


class CompanyEnvelope(ApiModel):
    company: CompanyResponse


class CompanyDetailEnvelope(ApiModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(ApiModel):
    companies: List[CompanyResponse]
