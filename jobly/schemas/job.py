"""
Pydantic schemas for Job API requests/responses.
"""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from jobly.schemas.company import CompanyResponse


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1, description="Fraction of the company, 0 to 1")
    company_handle: str = Field(..., min_length=1, max_length=25)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class JobUpdateRequest(BaseModel):
    """Partial update. id and companyHandle cannot change."""
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class JobResponse(BaseModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class JobListItem(JobResponse):
    company_name: Optional[str] = None


class JobDetailResponse(BaseModel):
    """A job with its owning company embedded in place of companyHandle"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company: CompanyResponse


class JobEnvelope(BaseModel):
    job: JobResponse


class JobDetailEnvelope(BaseModel):
    job: JobDetailResponse


class JobListResponse(BaseModel):
    jobs: List[JobListItem]


class JobDeletedResponse(BaseModel):
    deleted: int
