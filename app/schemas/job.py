from pydantic import Field, StrictInt
from typing import List, Optional
from app.core.sql import INT_MAX
from app.schemas.common import ApiModel, ApiRequest

# A fraction between 0 and 1 written as a decimal string
EQUITY_PATTERN = r"^(0(\.\d+)?|1(\.0+)?)$"


class JobCreateRequest(ApiRequest):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[StrictInt] = Field(None, ge=0, le=INT_MAX)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(ApiRequest):
    """Schema for a partial job update; id and companyHandle are fixed"""
    title: str = Field(None, min_length=1)
    salary: Optional[StrictInt] = Field(None, ge=0, le=INT_MAX)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)


class JobSummary(ApiModel):
    """Job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None


class JobResponse(JobSummary):
    """Schema for job response"""
    company_handle: str


class JobEnvelope(ApiModel):
    job: JobResponse


class JobListEnvelope(ApiModel):
    jobs: List[JobResponse]
